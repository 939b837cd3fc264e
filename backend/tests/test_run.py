"""Tests for the development server entry point."""
import run
from contentops.config import settings


def test_parser_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "HOST", "0.0.0.0")
    monkeypatch.setattr(settings, "PORT", 9001)
    args = run.build_parser().parse_args([])
    assert args.host == "0.0.0.0"
    assert args.port == 9001
    assert args.reload is False


def test_main_passes_arguments_to_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    run.main(["--host", "10.0.0.5", "--port", "8123", "--reload"])
    app, kwargs = calls[0]
    assert app == "contentops.main:app"
    assert kwargs["host"] == "10.0.0.5"
    assert kwargs["port"] == 8123
    assert kwargs["reload"] is True
    assert kwargs["log_level"] == settings.LOG_LEVEL.lower()
