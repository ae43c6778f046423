"""
History module data models.

Declared shapes of GET /v1/detections. A Detection is created
server-side and only ever read here.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr

from aura.modules.detection.models import AnalysisItem, Score


class Detection(BaseModel):
    """One persisted detection result."""

    id: UUID = Field(..., description="Detection ID")
    user_id: UUID = Field(..., description="Owner")
    input_text: StrictStr = Field(..., description="Submitted text")
    score: Score = Field(..., description="Probability the text is AI-generated")
    is_ai: StrictBool = Field(..., description="Final classification")
    created_at: datetime = Field(..., description="When the detection ran")
    detailed_analysis: Optional[list[AnalysisItem]] = Field(
        ...,
        description="Flagged sentences (premium) or null (free plan)",
    )

    model_config = {"frozen": True}


class ListDetectionsResponse(BaseModel):
    """Response of GET /v1/detections."""

    items: list[Detection] = Field(..., description="One page, most recent first")
    total: StrictInt = Field(..., description="Total detections for the user")
