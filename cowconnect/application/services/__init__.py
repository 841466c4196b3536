"""Application services: content gate, categorizer and the two ledgers."""

from cowconnect.application.services.categorizer import CATEGORY_TAGS, Categorizer
from cowconnect.application.services.content_gate import (
    ContentGate,
    Verdict,
    VerdictKind,
)
from cowconnect.application.services.registration_ledger import RegistrationLedger
from cowconnect.application.services.verification_ledger import VerificationLedger

__all__ = [
    "CATEGORY_TAGS",
    "Categorizer",
    "ContentGate",
    "RegistrationLedger",
    "Verdict",
    "VerdictKind",
    "VerificationLedger",
]
