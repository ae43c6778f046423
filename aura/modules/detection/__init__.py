"""
Detection module.

Submits text to the detection API and presents the result.

Public API:
- DetectionWorkflow: submit / reset with idle/submitting state
- AiResponse, AnalysisItem: declared response shapes
- build_result_view: display model for a result
"""

from .models import (
    AiResponse,
    AnalysisItem,
    AnalysisState,
    DetectionStatus,
    ResultView,
    Score,
    TextSegment,
)
from .presenter import build_result_view, format_score, highlight_segments
from .service import DetectionWorkflow, DETECT_PATH

__all__ = [
    # Models
    "AiResponse",
    "AnalysisItem",
    "AnalysisState",
    "DetectionStatus",
    "ResultView",
    "Score",
    "TextSegment",
    # Presenter
    "build_result_view",
    "format_score",
    "highlight_segments",
    # Workflow
    "DetectionWorkflow",
    "DETECT_PATH",
]
