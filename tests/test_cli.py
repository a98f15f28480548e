import logging
import termios

import pytest

from floodpaint import cli


class FakeSession:
    def __init__(self, sink):
        self.sink = sink
        self.closed = False

    def __call__(self, **kwargs):
        return self

    def __enter__(self):
        return self.sink

    def __exit__(self, *exc):
        self.closed = True


class BrokenSession:
    def __init__(self, **kwargs):
        pass

    def __enter__(self):
        raise termios.error(25, "Inappropriate ioctl for device")

    def __exit__(self, *exc):
        pass


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    assert "Press q to quit" in " ".join(capsys.readouterr().out.split())


def test_rejects_unknown_flags():
    with pytest.raises(SystemExit) as exc:
        cli.main(["--speed", "3"])
    assert exc.value.code == 2


def test_runs_until_quit(monkeypatch, make_sink):
    sink = make_sink(4, 3, quit_after=3)
    session = FakeSession(sink)
    monkeypatch.setattr(cli, "TerminalSession", session)
    cli.main([])
    assert len(sink.placements) == 3
    assert session.closed


def test_terminal_error_exits_with_status_1(monkeypatch, capsys):
    monkeypatch.setattr(cli, "TerminalSession", BrokenSession)
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 1
    assert "terminal error" in capsys.readouterr().err


def test_debug_logging_goes_to_file(monkeypatch):
    calls = []
    monkeypatch.setenv(cli.DEBUG_ENV, "1")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    cli.configure_logging()
    assert calls[0]["filename"] == cli.LOG_PATH
    assert calls[0]["level"] == logging.DEBUG
