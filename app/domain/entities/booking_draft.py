from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class WizardStep(IntEnum):
    SERVICE = 0
    MASTER = 1
    SCHEDULE = 2
    CONTACT = 3
    CONFIRM = 4

    @property
    def label(self) -> str:
        return STEP_LABELS[self]


STEP_LABELS: dict[WizardStep, str] = {
    WizardStep.SERVICE: "Service",
    WizardStep.MASTER: "Master",
    WizardStep.SCHEDULE: "Date/Time",
    WizardStep.CONTACT: "Contact",
    WizardStep.CONFIRM: "Confirm",
}


@dataclass(frozen=True)
class BookingDraft:
    service_id: str = ""
    staff_id: str = ""
    date: str = ""  # YYYY-MM-DD
    time: str = ""  # HH:MM
    name: str = ""
    phone: str = ""
    note: str = ""
    consent: bool = True
    # transient UI state
    step: WizardStep = WizardStep.SERVICE
    sending: bool = False
    sent: bool = False
    error: str | None = None
