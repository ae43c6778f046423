"""
History module.

Paginated list of the user's past detections.

Public API:
- HistoryWorkflow: fetch_page / load_more / invalidate / ensure_loaded
- Detection, ListDetectionsResponse: declared response shapes
- fetch_detections: one validated page, shared with the dashboard
"""

from .models import Detection, ListDetectionsResponse
from .service import HistoryWorkflow, fetch_detections, DETECTIONS_PATH

__all__ = [
    "Detection",
    "ListDetectionsResponse",
    "HistoryWorkflow",
    "fetch_detections",
    "DETECTIONS_PATH",
]
