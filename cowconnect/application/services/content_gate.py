"""Content gate: one classification call deciding whether a submission is accepted.

The verdict is a three-way value. Unavailable is never folded into Accepted
or Rejected: a degraded classifier, an exhausted quota or a malformed answer
all surface as "temporarily unavailable" so the user can resubmit later.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cowconnect.application.interfaces.services import (
    ClassificationServiceError,
    IClassificationClient,
)
from cowconnect.application.services.model_reply import coerce_flag, parse_json_reply
from cowconnect.domain.value_objects.core import MediaPayload
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

GATE_PROMPT = """You moderate a community platform about indigenous Indian cow breeds:
cattle health, veterinary care, breeding, feeding and grazing, dairy, shelters
(gaushalas), conservation and related farming practice.

Decide whether the following post (and the attached media, if any) is relevant
to this community and genuine. Also decide whether its claims (for example
medical or treatment advice) should be independently verified by a veterinary
doctor or a research institution.

Answer with a single JSON object and nothing else:
{{"relevant": true|false, "needsReview": true|false}}

Post:
\"\"\"{text}\"\"\"
"""


class VerdictKind(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Verdict:
    """Gate outcome. needs_review is meaningful only when accepted."""

    kind: VerdictKind
    needs_review: bool = False
    reason: str | None = None

    @classmethod
    def accepted(cls, needs_review: bool) -> "Verdict":
        return cls(VerdictKind.ACCEPTED, needs_review=needs_review)

    @classmethod
    def rejected(cls) -> "Verdict":
        return cls(VerdictKind.REJECTED)

    @classmethod
    def unavailable(cls, reason: str) -> "Verdict":
        return cls(VerdictKind.UNAVAILABLE, reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.kind is VerdictKind.ACCEPTED


class ContentGate:
    """Sends submitted text/media to the classifier and interprets its verdict (IContentGate)."""

    def __init__(self, client: IClassificationClient) -> None:
        self.client = client

    async def evaluate(self, text: str, media: MediaPayload | None = None) -> Verdict:
        """Return the verdict for text and optional media. Never raises, never retries."""
        try:
            reply = await self.client.generate(GATE_PROMPT.format(text=text), media)
        except ClassificationServiceError as e:
            logger.warning("Content gate unavailable: %s", e)
            return Verdict.unavailable(str(e))
        return self.interpret(reply)

    @staticmethod
    def interpret(reply: str | None) -> Verdict:
        """Map a raw classifier reply to a verdict.

        Accepts ``relevant``/``needsReview`` (or the older ``valid``/``verify``
        keys) as booleans or "true"/"false" strings. Anything else is
        Unavailable.
        """
        try:
            data = parse_json_reply(reply)
        except ValueError as e:
            logger.warning("Content gate got an unparseable reply: %s", e)
            return Verdict.unavailable(str(e))
        if not isinstance(data, dict):
            return Verdict.unavailable("Classifier reply is not a JSON object")

        relevant = coerce_flag(data.get("relevant", data.get("valid")))
        if relevant is None:
            return Verdict.unavailable("Classifier reply has no relevance flag")
        if not relevant:
            return Verdict.rejected()
        needs_review = coerce_flag(data.get("needsReview", data.get("verify")))
        return Verdict.accepted(needs_review=bool(needs_review))
