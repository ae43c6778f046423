"""Tests for the terminal front end."""

import argparse
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from supabase import AuthError

from aura.app import AuraApp
from aura.main import build_parser, cmd_detect, cmd_history, cmd_upgrade, main, read_text, run
from aura.modules.detection.service import DETECT_PATH
from aura.modules.history.service import DETECTIONS_PATH
from aura.modules.profiles.models import ProfileLoaded
from aura.modules.session.service import SessionStore, SupabaseSessionProvider
from aura.shared.config import Settings

from tests.conftest import FakeSessionProvider, make_detection, make_session


class RejectedCredentials(AuthError):
    def __init__(self):
        Exception.__init__(self, "Invalid login credentials")


@pytest.fixture
def app(session, free_profile, client, navigator, settings):
    entitlements = AsyncMock()
    entitlements.fetch_profile.return_value = ProfileLoaded(profile=free_profile)
    return AuraApp(
        sessions=SessionStore(FakeSessionProvider(session)),
        entitlements=entitlements,
        client=client,
        navigator=navigator,
        settings=settings,
    )


class TestParser:
    def test_detect_with_text(self):
        args = build_parser().parse_args(["detect", "some text"])
        assert args.command == "detect"
        assert args.text == "some text"

    def test_global_token(self):
        args = build_parser().parse_args(["--token", "abc", "history", "--pages", "2"])
        assert args.token == "abc"
        assert args.pages == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_email_requires_password(self):
        with pytest.raises(SystemExit):
            main(["--email", "a@b.c", "logout"])


class TestReadText:
    def test_reads_file(self, tmp_path: Path):
        path = tmp_path / "essay.txt"
        path.write_text("From a file.")
        args = argparse.Namespace(file=path, text=None)
        assert read_text(args) == "From a file."

    def test_missing_file(self, tmp_path: Path):
        args = argparse.Namespace(file=tmp_path / "missing.txt", text=None)
        assert read_text(args) is None


class TestCommands:
    @pytest.mark.asyncio
    async def test_detect_prints_result(self, app, backend, capsys):
        backend.respond("POST", DETECT_PATH, json={"is_ai": True, "score": 0.87, "detailed_analysis": None})
        await app.start()

        code = await cmd_detect(app, argparse.Namespace(file=None, text="Some text."))

        assert code == 0
        output = capsys.readouterr().out
        assert "87.0%" in output
        assert "プレミアム" in output

    @pytest.mark.asyncio
    async def test_detect_reports_error(self, app, backend, capsys):
        backend.respond("POST", DETECT_PATH, status=401, json={})
        await app.start()

        code = await cmd_detect(app, argparse.Namespace(file=None, text="Some text."))

        assert code == 1
        assert "認証エラー" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_history_loads_requested_pages(self, app, backend):
        def handler(request):
            skip = int(request.url.params["skip"])
            count = 3 if skip == 0 else 1
            items = [make_detection(skip + i) for i in range(count)]
            return httpx.Response(200, json={"items": items, "total": 4})

        backend.respond_with("GET", DETECTIONS_PATH, handler)
        await app.start()

        code = await cmd_history(app, argparse.Namespace(pages=5))

        assert code == 0
        assert len(app.history.items) == 4
        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_upgrade_opens_checkout(self, app, backend, navigator):
        backend.respond("POST", "/v1/payments/create-checkout-session", json={"url": "https://pay.example/c/1"})
        await app.start()

        assert await cmd_upgrade(app, argparse.Namespace()) == 0
        assert navigator.redirects == ["https://pay.example/c/1"]


class TestMain:
    def test_rejected_sign_in_exits_with_message(self, settings, navigator, capsys):
        supabase = MagicMock()
        supabase.auth.sign_in_with_password.side_effect = RejectedCredentials()
        app = AuraApp(
            sessions=SessionStore(SupabaseSessionProvider(supabase)),
            entitlements=AsyncMock(),
            client=MagicMock(),
            navigator=navigator,
            settings=settings,
        )

        with patch("aura.main.create_app", return_value=app):
            code = main(["--email", "a@b.c", "--password", "wrong", "logout"])

        assert code == 1
        assert "ログインに失敗しました。" in capsys.readouterr().out
        supabase.auth.sign_out.assert_not_called()

    @pytest.mark.asyncio
    async def test_unconfigured_backend_is_reported(self, backend, navigator, free_profile, caplog):
        settings = Settings(_env_file=None, api_endpoint=None)
        entitlements = AsyncMock()
        entitlements.fetch_profile.return_value = ProfileLoaded(profile=free_profile)
        app = AuraApp(
            sessions=SessionStore(FakeSessionProvider(make_session())),
            entitlements=entitlements,
            client=backend.client(base_url=None),
            navigator=navigator,
            settings=settings,
        )
        args = build_parser().parse_args(["sync"])

        with patch("aura.main.create_app", return_value=app):
            code = await run(args)

        assert code == 1
        assert "API_ENDPOINT is not set" in caplog.text
        assert backend.requests == []
