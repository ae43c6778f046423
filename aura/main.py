"""
Aura - AI-generated text detection from the terminal.

Usage:
    aura detect "text to check"
    aura detect -f essay.txt
    aura history --pages 2
    aura dashboard
    aura upgrade | billing | verify <checkout_session_id> | sync
    aura delete-account | reset-password | logout

Authenticate with --token (or ACCESS_TOKEN), or with --email/--password
against Supabase Auth.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

from rich.logging import RichHandler
from rich.prompt import Confirm

from aura.app import AuraApp, create_app
from aura.display import (
    console,
    render_billing_action,
    render_error,
    render_history,
    render_notice,
    render_result,
    render_usage,
)
from aura.modules.billing.models import ReconciliationStatus
from aura.modules.dashboard.presenter import build_usage_view
from aura.modules.detection.presenter import build_result_view
from aura.modules.session.service import SupabaseSessionProvider
from aura.shared.config import get_settings
from aura.shared.exceptions import ACCOUNT_DELETED_MESSAGE, AuraError

logger = logging.getLogger(__name__)

Command = Callable[[AuraApp, argparse.Namespace], Awaitable[int]]


def read_text(args: argparse.Namespace) -> Optional[str]:
    """Resolve the text to check from --file, the argument or stdin."""
    if args.file:
        if not args.file.exists():
            console.print(f"[red]Error:[/red] File not found: {args.file}")
            return None
        return args.file.read_text()
    if args.text:
        return args.text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


async def cmd_detect(app: AuraApp, args: argparse.Namespace) -> int:
    text = read_text(args)
    if not text or not text.strip():
        console.print("[red]Error:[/red] Provide text, --file or pipe text on stdin")
        return 2

    result = await app.detect(text)
    if app.detector.error is not None:
        render_error(app.detector.error)
        return 1
    if result is None:
        return 1

    render_result(build_result_view(result, app.detector.text))
    return 0


async def cmd_history(app: AuraApp, args: argparse.Namespace) -> int:
    await app.open_history()
    for _ in range(args.pages - 1):
        if not app.history.has_more or app.history.error is not None:
            break
        await app.load_more_history()

    # Items already shown stay visible next to a failed page
    render_history(app.history.items, app.history.has_more)
    if app.history.error is not None:
        render_error(app.history.error)
        return 1
    return 0


async def cmd_dashboard(app: AuraApp, args: argparse.Namespace) -> int:
    snapshot = await app.load_dashboard()
    if snapshot is None:
        error = app.dashboard.error
        if error is not None:
            render_error(error)
        else:
            console.print("[red]Error:[/red] ログインが必要です。")
        return 1

    render_usage(build_usage_view(snapshot, app.settings), snapshot)
    render_billing_action(app.billing_action)
    return 0


async def cmd_upgrade(app: AuraApp, args: argparse.Namespace) -> int:
    if await app.upgrade():
        render_notice("決済ページをブラウザで開きました。")
        return 0
    if app.billing.error is not None:
        render_error(app.billing.error)
    return 1


async def cmd_billing(app: AuraApp, args: argparse.Namespace) -> int:
    if await app.manage_billing():
        render_notice("請求管理ページをブラウザで開きました。")
        return 0
    if app.billing.error is not None:
        render_error(app.billing.error)
    return 1


async def _report_reconciliation(app: AuraApp, status: ReconciliationStatus, done: str) -> int:
    if status == ReconciliationStatus.SUCCESS:
        render_notice(done)
        return 0
    if status == ReconciliationStatus.ERROR and app.reconciler.error is not None:
        render_error(app.reconciler.error)
        return 1
    console.print("[yellow]確認する決済セッションがありません。[/yellow]")
    return 1


async def cmd_verify(app: AuraApp, args: argparse.Namespace) -> int:
    status = await app.verify_payment(args.session_id)
    return await _report_reconciliation(app, status, "お支払いが完了しました。プレミアムプランをご利用いただけます。")


async def cmd_sync(app: AuraApp, args: argparse.Namespace) -> int:
    status = await app.sync_subscription()
    return await _report_reconciliation(app, status, "サブスクリプション情報を更新しました。")


async def cmd_delete_account(app: AuraApp, args: argparse.Namespace) -> int:
    if not args.yes and not Confirm.ask(
        "アカウントと検出履歴をすべて削除します。よろしいですか?", console=console
    ):
        return 1

    if await app.delete_account():
        render_notice("アカウントを削除しました。")
        return 0
    if app.account.error is not None:
        render_error(app.account.error)
    return 1


async def cmd_reset_password(app: AuraApp, args: argparse.Namespace) -> int:
    if await app.send_password_reset():
        render_notice(app.account.notice or "")
        return 0
    if app.account.error is not None:
        render_error(app.account.error)
    return 1


async def cmd_logout(app: AuraApp, args: argparse.Namespace) -> int:
    await app.sign_out()
    render_notice("ログアウトしました。")
    return 0


BACKEND_COMMANDS = {"detect", "history", "dashboard", "upgrade", "billing", "verify", "sync", "delete-account"}

COMMANDS: dict[str, Command] = {
    "detect": cmd_detect,
    "history": cmd_history,
    "dashboard": cmd_dashboard,
    "upgrade": cmd_upgrade,
    "billing": cmd_billing,
    "verify": cmd_verify,
    "sync": cmd_sync,
    "delete-account": cmd_delete_account,
    "reset-password": cmd_reset_password,
    "logout": cmd_logout,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aura",
        description="Detect AI-generated text and manage your Aura account",
    )
    parser.add_argument("--token", help="Access token (default: ACCESS_TOKEN)")
    parser.add_argument("--email", help="Sign in with email and password")
    parser.add_argument("--password", help="Password for --email")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Check whether a text is AI-generated")
    detect.add_argument("text", nargs="?", help="Text to check")
    detect.add_argument("-f", "--file", type=Path, help="Read the text from a file")

    history = subparsers.add_parser("history", help="List past detections")
    history.add_argument("--pages", type=int, default=1, help="Number of pages to load (default: 1)")

    subparsers.add_parser("dashboard", help="Show usage statistics")
    subparsers.add_parser("upgrade", help="Open checkout for the premium plan")
    subparsers.add_parser("billing", help="Open the billing portal")

    verify = subparsers.add_parser("verify", help="Verify a completed checkout")
    verify.add_argument("session_id", nargs="?", help="Checkout session ID")

    subparsers.add_parser("sync", help="Refresh subscription state after a portal visit")

    delete = subparsers.add_parser("delete-account", help="Delete the account and all history")
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    subparsers.add_parser("reset-password", help="Mail a password-reset link")
    subparsers.add_parser("logout", help="Sign out")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


async def run(args: argparse.Namespace) -> int:
    app = create_app(access_token=args.token)
    if args.command in BACKEND_COMMANDS and not app.settings.is_api_configured:
        logger.warning("API_ENDPOINT is not set; backend requests will fail")

    if args.email:
        provider = app.sessions.provider
        if not isinstance(provider, SupabaseSessionProvider):
            console.print("[red]Error:[/red] --email cannot be combined with an access token")
            return 2
        await provider.sign_in_with_password(args.email, args.password or "")

    try:
        await app.start()
        if app.deleted_account:
            console.print(f"[red]{ACCOUNT_DELETED_MESSAGE}[/red]")
            return 1
        if app.profile_error is not None:
            render_error(app.profile_error)

        return await COMMANDS[args.command](app, args)
    finally:
        await app.drain()
        app.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.email and not args.password:
        parser.error("--password is required with --email")

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(run(args))
    except AuraError as e:
        logger.debug(f"Command failed: {e.to_dict()}")
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
