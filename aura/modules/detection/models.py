"""
Detection module data models.

These are the declared shapes of the detect endpoint's payloads.
detailed_analysis distinguishes null (feature locked on the free plan)
from an empty list (analyzed, nothing flagged); both must survive
validation unchanged.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr

Score = Annotated[float, Field(strict=True, ge=0.0, le=1.0)]


class AnalysisItem(BaseModel):
    """One sentence flagged by the detailed analysis, with the reason."""

    sentence: StrictStr = Field(..., description="Flagged sentence, verbatim from the input")
    reason: StrictStr = Field(..., description="Why the sentence looks machine-written")


class AiResponse(BaseModel):
    """Response of POST /v1/detect."""

    is_ai: StrictBool = Field(..., description="Final classification")
    score: Score = Field(..., description="Probability the text is AI-generated")
    # Required but nullable: an absent key is a contract violation
    detailed_analysis: Optional[list[AnalysisItem]] = Field(
        ...,
        description="Flagged sentences (premium) or null (free plan)",
    )

    model_config = {"frozen": True}


class DetectRequest(BaseModel):
    """Body of POST /v1/detect."""

    text: str = Field(..., min_length=1)


class DetectionStatus(str, Enum):
    """Workflow states. Every submission ends back at IDLE."""

    IDLE = "idle"
    SUBMITTING = "submitting"


class AnalysisState(str, Enum):
    """What the detailed-analysis section of a result shows."""

    LOCKED = "locked"            # null: premium feature, show upgrade prompt
    NO_FINDINGS = "no_findings"  # []: analyzed, nothing flagged
    HIGHLIGHTED = "highlighted"  # flagged sentences to highlight


class TextSegment(BaseModel):
    """A run of input text; reason is set when the run is highlighted."""

    text: str
    reason: Optional[str] = None

    @property
    def highlighted(self) -> bool:
        return self.reason is not None


class ResultView(BaseModel):
    """Display-ready view of one detection result."""

    is_ai: bool
    verdict: str
    short_label: str
    score_percent: str
    confidence: str
    summary: str
    analysis_state: AnalysisState
    segments: list[TextSegment] = Field(default_factory=list)
