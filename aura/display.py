"""Rich terminal rendering for detection results, history and usage."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from aura.modules.billing.models import BillingAction
from aura.modules.dashboard.models import DashboardSnapshot, UsageView
from aura.modules.detection.models import AnalysisState, ResultView
from aura.modules.history.models import Detection
from aura.shared.workflow import ErrorKind, WorkflowError

console = Console()

UPGRADE_PROMPT = "詳細な分析はプレミアムプランで利用できます。`aura upgrade` でアップグレードしてください。"
NO_FINDINGS_MESSAGE = "AI生成と判断された文はありませんでした。"
EMPTY_HISTORY_MESSAGE = "検出履歴はまだありません。"


def truncate(text: str, limit: int = 60) -> str:
    """Single-line preview of a text, e.g. for table cells."""
    flat = " ".join(text.split())
    if len(flat) > limit:
        return flat[:limit] + "..."
    return flat


def render_result(view: ResultView) -> None:
    """Print a detection result with its highlighted analysis.

    Flagged sentences are shown in red inline and their reasons listed
    below the text. A locked analysis shows the upgrade prompt instead.
    """
    colour = "red" if view.is_ai else "green"
    header = Text()
    header.append(f"{view.verdict}\n", style=f"bold {colour}")
    header.append(f"スコア: {view.score_percent}%  ", style="bold")
    header.append(f"信頼度: {view.confidence}\n", style="bold")
    header.append(view.summary, style="dim")
    console.print(Panel(header, title=f"判定: {view.short_label}", border_style=colour))

    if view.analysis_state == AnalysisState.LOCKED:
        console.print(f"[yellow]{UPGRADE_PROMPT}[/yellow]")
        return
    if view.analysis_state == AnalysisState.NO_FINDINGS:
        console.print(f"[green]{NO_FINDINGS_MESSAGE}[/green]")
        return

    body = Text()
    reasons = []
    for segment in view.segments:
        if segment.highlighted:
            body.append(segment.text, style="bold red underline")
            reasons.append(segment)
        else:
            body.append(segment.text)
    console.print(Panel(body, title="詳細分析", border_style="blue"))

    for index, segment in enumerate(reasons, start=1):
        console.print(f"[bold red]{index}.[/bold red] {truncate(segment.text)}")
        console.print(f"   [dim]{segment.reason}[/dim]")


def history_table(items: list[Detection], title: str = "検出履歴") -> Table:
    table = Table(title=title)
    table.add_column("日時", style="dim", no_wrap=True)
    table.add_column("判定")
    table.add_column("スコア", justify="right")
    table.add_column("テキスト")

    for item in items:
        verdict = "[red]AI[/red]" if item.is_ai else "[green]人間[/green]"
        table.add_row(
            item.created_at.strftime("%Y-%m-%d %H:%M"),
            verdict,
            f"{item.score * 100:.1f}%",
            truncate(item.input_text),
        )
    return table


def render_history(items: list[Detection], has_more: bool) -> None:
    if not items:
        console.print(f"[dim]{EMPTY_HISTORY_MESSAGE}[/dim]")
        return
    console.print(history_table(items))
    if has_more:
        console.print("[dim]さらに表示するには --pages を増やしてください。[/dim]")


def render_usage(view: UsageView, snapshot: Optional[DashboardSnapshot] = None) -> None:
    """Print plan, quota, rates and the daily activity chart."""
    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("プラン", view.plan_label)
    summary.add_row(
        "リクエスト数",
        f"{view.total_requests} / {view.request_limit} ({view.progress_percent:.0f}%)",
    )
    summary.add_row("AI判定率", view.ai_detection_rate)
    summary.add_row("平均スコア", view.average_score)
    console.print(Panel(summary, title="利用状況", border_style="blue"))

    if view.cancellation_pending:
        console.print("[yellow]サブスクリプションは期間終了時に解約されます。[/yellow]")

    if view.chart:
        peak = max(point.count for point in view.chart) or 1
        for point in view.chart:
            bar = "█" * round(point.count / peak * 30)
            console.print(f"{point.label:>6} {bar} {point.count}")

    if snapshot is not None and snapshot.recent_detections:
        console.print(history_table(snapshot.recent_detections, title="最近の検出"))


def render_billing_action(action: BillingAction) -> None:
    if action == BillingAction.UPGRADE:
        console.print("[cyan]`aura upgrade` でプレミアムプランにアップグレードできます。[/cyan]")
    elif action == BillingAction.MANAGE:
        console.print("[cyan]`aura billing` でサブスクリプションを管理できます。[/cyan]")


def render_error(error: WorkflowError) -> None:
    label = "設定エラー" if error.kind == ErrorKind.CONFIGURATION else "エラー"
    console.print(f"[red]{label}:[/red] {error.message}")
    if error.requires_reauth:
        console.print("[dim]`aura --email ... --password ...` で再度ログインしてください。[/dim]")


def render_notice(message: str) -> None:
    console.print(f"[green]{message}[/green]")
