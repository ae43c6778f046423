"""
Detection workflow.

State machine per submission: idle -> submitting -> {result | error},
always returning to idle. Only one submission is in flight at a time;
a second call while submitting is ignored.
"""

import logging
from typing import Callable, Optional

from aura.modules.session.models import Session
from aura.shared.exceptions import SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.schemas import parse_payload
from aura.shared.workflow import RequestGeneration, WorkflowError, describe_error

from .models import AiResponse, DetectRequest, DetectionStatus

logger = logging.getLogger(__name__)

DETECT_PATH = "/v1/detect"


class DetectionWorkflow:
    """
    Submits text to the detection endpoint and holds the outcome.

    on_success is called after a validated result is stored; the app
    wires it to history invalidation.
    """

    def __init__(
        self,
        client: BackendClient,
        on_success: Optional[Callable[[], None]] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._on_success = on_success
        self._timeout = timeout
        self._generation = RequestGeneration()

        self.status = DetectionStatus.IDLE
        self.text = ""
        self.result: Optional[AiResponse] = None
        self.error: Optional[WorkflowError] = None

    @property
    def is_submitting(self) -> bool:
        return self.status == DetectionStatus.SUBMITTING

    def can_submit(self, text: str) -> bool:
        """Whether a submission would be accepted right now."""
        return not self.is_submitting and bool(text and text.strip())

    async def submit(self, session: Optional[Session], text: str) -> Optional[AiResponse]:
        """
        Run one detection.

        Args:
            session: Current session; None yields an authentication error
            text: Text to classify

        Returns:
            The validated result, or None when the call failed or was ignored
        """
        if not self.can_submit(text):
            logger.debug("Detection ignored: already submitting or empty text")
            return None

        self.result = None
        self.error = None
        self.text = text

        if session is None:
            self.error = describe_error(SessionMissingError(), "detect")
            return None

        stamp = self._generation.next()
        self.status = DetectionStatus.SUBMITTING
        try:
            raw = await self._client.post(
                DETECT_PATH,
                token=session.access_token,
                json=DetectRequest(text=text).model_dump(),
                timeout=self._timeout,
            )
            result = parse_payload(AiResponse, raw)
        except Exception as e:
            if self._generation.is_current(stamp):
                self.error = describe_error(e, "detect")
            return None
        finally:
            if self._generation.is_current(stamp):
                self.status = DetectionStatus.IDLE

        if not self._generation.is_current(stamp):
            logger.debug("Discarding superseded detection result")
            return None

        self.result = result
        logger.debug(f"Detection finished: is_ai={result.is_ai} score={result.score:.3f}")
        if self._on_success is not None:
            self._on_success()
        return result

    def reset(self) -> None:
        """Drop text, result and error; any in-flight result is discarded."""
        self._generation.invalidate()
        self.status = DetectionStatus.IDLE
        self.text = ""
        self.result = None
        self.error = None
