import re
from datetime import datetime

from devops_api.host_info.host import format_timestamp, resolve_hostname


def test_format_timestamp_pads_every_field():
    assert format_timestamp(datetime(2025, 3, 7, 9, 5, 59)) == "2503070905"


def test_format_timestamp_two_digit_year():
    assert format_timestamp(datetime(2009, 12, 31, 23, 59)) == "0912312359"


def test_format_timestamp_defaults_to_now():
    before = datetime.now().strftime("%y%m%d%H%M")
    value = format_timestamp()
    after = datetime.now().strftime("%y%m%d%H%M")
    assert re.fullmatch(r"\d{10}", value)
    assert before <= value <= after


def test_resolve_hostname_uses_override(monkeypatch):
    monkeypatch.setenv("HOSTNAME", "web-1")
    assert resolve_hostname() == "web-1"


def test_resolve_hostname_empty_override_falls_back(monkeypatch):
    monkeypatch.setenv("HOSTNAME", "")
    monkeypatch.setattr("devops_api.host_info.host.socket.gethostname", lambda: "box")
    assert resolve_hostname() == "box"


def test_resolve_hostname_without_override(monkeypatch):
    monkeypatch.delenv("HOSTNAME", raising=False)
    monkeypatch.setattr("devops_api.host_info.host.socket.gethostname", lambda: "box")
    assert resolve_hostname() == "box"
