"""
Turns a detection result into what the result card shows.

Highlighting: each flagged sentence is located in the submitted text
(first occurrence), spans are ordered by position, overlapping or
missing sentences are dropped, and the text is split into plain and
highlighted segments.
"""

from typing import Optional

from .models import AiResponse, AnalysisItem, AnalysisState, ResultView, TextSegment

AI_VERDICT = "AI生成の可能性が高い"
HUMAN_VERDICT = "人間による執筆の可能性が高い"


def format_score(score: float) -> str:
    """0.87 -> "87.0"."""
    return f"{score * 100:.1f}"


def confidence_level(score: float) -> str:
    if score >= 0.8:
        return "高"
    if score >= 0.6:
        return "中"
    return "低"


def summarize(result: AiResponse) -> str:
    if result.is_ai:
        return (
            f"この文章はAIによって生成された可能性が{format_score(result.score)}%です。"
            "文章の構造、語彙選択、文体などからAI特有のパターンが検出されました。"
        )
    return (
        f"この文章は人間によって書かれた可能性が{format_score(1 - result.score)}%です。"
        "自然な文章の流れや人間らしい表現が確認されました。"
    )


def analysis_state(detailed_analysis: Optional[list[AnalysisItem]]) -> AnalysisState:
    if detailed_analysis is None:
        return AnalysisState.LOCKED
    if not detailed_analysis:
        return AnalysisState.NO_FINDINGS
    return AnalysisState.HIGHLIGHTED


def highlight_segments(text: str, items: list[AnalysisItem]) -> list[TextSegment]:
    """
    Split text into plain and highlighted segments.

    Returns a single plain segment when nothing can be located.
    """
    spans = []
    for item in items:
        if not item.sentence:
            continue
        start = text.find(item.sentence)
        if start == -1:
            continue
        spans.append((start, start + len(item.sentence), item.reason))
    spans.sort(key=lambda span: span[0])

    segments: list[TextSegment] = []
    last_index = 0
    for start, end, reason in spans:
        if start < last_index:
            continue  # overlaps the previous highlight
        if start > last_index:
            segments.append(TextSegment(text=text[last_index:start]))
        segments.append(TextSegment(text=text[start:end], reason=reason))
        last_index = end

    if last_index < len(text):
        segments.append(TextSegment(text=text[last_index:]))
    return segments


def build_result_view(result: AiResponse, text: str) -> ResultView:
    """Build the display model for a result of the given text."""
    state = analysis_state(result.detailed_analysis)
    segments = []
    if state == AnalysisState.HIGHLIGHTED:
        segments = highlight_segments(text, result.detailed_analysis or [])

    return ResultView(
        is_ai=result.is_ai,
        verdict=AI_VERDICT if result.is_ai else HUMAN_VERDICT,
        short_label="AI" if result.is_ai else "人間",
        score_percent=format_score(result.score),
        confidence=confidence_level(result.score),
        summary=summarize(result),
        analysis_state=state,
        segments=segments,
    )
