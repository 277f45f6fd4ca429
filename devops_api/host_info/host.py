"""Local host facts reported by the hello endpoint."""

import os
import socket
from datetime import datetime
from typing import Optional


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Format local wall-clock time as ``YYMMDDHHmm``.

    Args:
        now: Time to format, defaults to the current local time.

    Returns:
        Exactly 10 ASCII digits, no separators or timezone.
    """
    now = now or datetime.now()
    return now.strftime("%y%m%d%H%M")


def resolve_hostname() -> str:
    """Return the ``HOSTNAME`` override if set, else the OS hostname."""
    return os.getenv("HOSTNAME") or socket.gethostname()
