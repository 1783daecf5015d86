import io
import logging

import pytest

from stampede import cli
from stampede.errors import ConfigError


class BrokenStream:
    def __iter__(self):
        raise OSError("stdin closed")


class BrokenStdin:
    buffer = BrokenStream()


def test_parse_args_reads_positionals():
    args = cli.parse_args(["http://example.test", "10"])
    assert args.url == "http://example.test"
    assert args.count == 10
    assert args.backoff_ms == 100
    assert args.timeout is None
    assert not args.verify_tls


@pytest.mark.parametrize("count", ["ten", "-1", "1.5", "5_000", " 5 ", "++5"])
def test_parse_args_rejects_bad_count(count):
    with pytest.raises(SystemExit) as exc:
        cli.parse_args(["http://example.test", count])
    assert exc.value.code == 2


def test_parse_args_requires_count():
    with pytest.raises(SystemExit):
        cli.parse_args(["http://example.test"])


def test_read_targets_keeps_lines_in_order():
    stream = io.BytesIO(b"/a\n/b\r\n\n/c")
    assert cli.read_targets(stream) == ["/a", "/b", "", "/c"]


def test_read_targets_failure_is_config_error():
    with pytest.raises(ConfigError):
        cli.read_targets(BrokenStream())


def test_main_reports_malformed_url(monkeypatch, caplog):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"/a\n")))
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)

    with caplog.at_level(logging.ERROR):
        code = cli.main(["not a url", "2"])

    assert code == 1
    assert any("exit on error: invalid URL" in r.getMessage() for r in caplog.records)


def test_main_unreadable_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", BrokenStdin())
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)

    assert cli.main(["http://example.test", "1"]) == 1


def test_main_with_no_targets_succeeds(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"")))
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)

    assert cli.main(["http://example.test", "5"]) == 0


def test_read_targets_rejects_invalid_utf8():
    with pytest.raises(ConfigError):
        cli.read_targets(io.BytesIO(b"/ok\n/\xff\xfe\n"))


def test_read_targets_decodes_utf8():
    assert cli.read_targets(io.BytesIO("/café\n".encode("utf-8"))) == ["/café"]


def test_parse_args_accepts_leading_plus():
    assert cli.parse_args(["http://example.test", "+7"]).count == 7
