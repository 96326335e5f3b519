"""
Tests for the rostr CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from rostr.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def file_backend(tmp_path, monkeypatch):
    """Point the CLI at a throwaway file store."""
    path = tmp_path / "storage.json"
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_PATH", str(path))
    monkeypatch.setenv("ROSTR_ENV", "development")
    return path


class TestProgressCommands:
    """Test progress/mark/reset."""

    def test_progress_on_fresh_device(self):
        result = runner.invoke(app, ["progress"])
        assert result.exit_code == 0
        assert "Next step: welcome" in result.output

    def test_mark_then_progress(self, file_backend):
        assert runner.invoke(app, ["mark", "welcome"]).exit_code == 0
        result = runner.invoke(app, ["progress"])
        assert "Next step: create-account" in result.output
        assert json.loads(file_backend.read_text()) == {"has_seen_welcome": "true"}

    def test_mark_unknown_step(self):
        result = runner.invoke(app, ["mark", "skydiving"])
        assert result.exit_code == 1
        assert "Unknown step" in result.output

    def test_reset(self, file_backend):
        runner.invoke(app, ["mark", "welcome"])
        result = runner.invoke(app, ["reset"])
        assert result.exit_code == 0
        assert json.loads(file_backend.read_text()) == {}

    def test_reset_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("ROSTR_ENV", "production")
        result = runner.invoke(app, ["reset"])
        assert result.exit_code == 1


class TestCaptureCommands:
    """Test capture/clipboard/invite/referral/route."""

    def test_capture_invite_link(self):
        result = runner.invoke(app, ["capture", "rostr://invite?circle=c1&invited_by=Sam"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["invite"])
        assert '"circleId": "c1"' in result.output

    def test_capture_nothing(self):
        result = runner.invoke(app, ["capture", "https://example.com"])
        assert result.exit_code == 1

    def test_clipboard(self):
        result = runner.invoke(app, ["clipboard", "rostr://invite?circle=c2"])
        assert "Stored pending invite" in result.output
        runner.invoke(app, ["invite", "--clear"])
        assert "No pending invite" in runner.invoke(app, ["invite"]).output

    def test_referral_and_route(self):
        runner.invoke(app, ["capture", "https://rostrdating.com/join?ref=u1"])

        assert '"ref": "u1"' in runner.invoke(app, ["referral"]).output

        result = runner.invoke(app, ["route", "--group", "(auth)", "--signed-in"])
        assert "/(auth)/friend-invite" in result.output

        runner.invoke(app, ["referral", "--clear"])
        result = runner.invoke(app, ["route", "--group", "(auth)", "--signed-in"])
        assert "/(tabs)" in result.output

    def test_route_signed_out(self):
        result = runner.invoke(app, ["route", "--group", "(tabs)"])
        assert "/(auth)/onboarding-welcome" in result.output

    def test_capture_url_without_invite_or_referral(self, file_backend):
        result = runner.invoke(app, ["capture", "https://rostrdating.com/join?phone=555&invited_by=Sam"])
        assert result.exit_code == 1
        assert "No invite or referral" in result.output
        assert not file_backend.exists()
