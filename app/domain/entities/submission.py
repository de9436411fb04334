from __future__ import annotations

from enum import Enum


class SubmissionOutcome(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    IGNORED = "ignored"  # duplicate while in flight, already sent, or not on the confirm step
