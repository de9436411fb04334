from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.catalog import StaffMember


@dataclass(frozen=True)
class SlotState:
    time: str
    available: bool


@dataclass(frozen=True)
class BookingSummary:
    service: str
    master: str
    when: str
    client: str
    note: str | None = None


@dataclass(frozen=True)
class WizardView:
    """Everything a renderer needs to draw the current wizard screen."""

    draft: BookingDraft
    step_labels: tuple[str, ...]
    can_advance: bool
    can_submit: bool
    eligible_staff: tuple[StaffMember, ...]
    blocked_slots: tuple[str, ...]
    slots: tuple[SlotState, ...]
    summary: BookingSummary
    demo_mode: bool
