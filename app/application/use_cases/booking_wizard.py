from __future__ import annotations

import logging
from dataclasses import replace

from app.application.exceptions import InvalidCommandError, SubmissionError
from app.application.ports.reference_data import ReferenceDataPort
from app.application.use_cases.availability import blocked_slots, slot_board
from app.application.use_cases.eligibility import eligible_staff, is_eligible
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.domain.entities.booking_draft import STEP_LABELS, BookingDraft, WizardStep
from app.domain.entities.submission import SubmissionOutcome
from app.domain.entities.wizard_view import BookingSummary, WizardView


def can_proceed(step: WizardStep, draft: BookingDraft) -> bool:
    """Gate predicate for leaving `step` with the given draft."""
    if step == WizardStep.SERVICE:
        return bool(draft.service_id)
    if step == WizardStep.MASTER:
        return bool(draft.staff_id)
    if step == WizardStep.SCHEDULE:
        return bool(draft.date) and bool(draft.time)
    if step == WizardStep.CONTACT:
        return len(draft.name.strip()) > 1 and len(draft.phone.strip()) >= 8 and draft.consent
    return True


def is_complete(draft: BookingDraft) -> bool:
    """Every gate before the confirm step holds for the draft."""
    return all(can_proceed(step, draft) for step in WizardStep if step < WizardStep.CONFIRM)


def _require_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidCommandError(f"{field} must be a string")
    return value


class BookingWizard:
    """
    Five-step booking flow over one draft.

    Every command applies its own cascading invalidation synchronously:
    changing the service drops a staff selection that is no longer eligible,
    changing staff or date drops a time that became blocked.
    """

    def __init__(
        self,
        reference: ReferenceDataPort,
        submitter: SubmitBookingUseCase,
        today: str,
    ) -> None:
        self._reference = reference
        self._submitter = submitter
        self._draft = BookingDraft(date=today)
        self._logger = logging.getLogger(__name__)

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def step(self) -> WizardStep:
        return self._draft.step

    @property
    def can_advance(self) -> bool:
        return can_proceed(self._draft.step, self._draft)

    @property
    def can_submit(self) -> bool:
        draft = self._draft
        if draft.sending or draft.sent or draft.step != WizardStep.CONFIRM:
            return False
        return is_complete(draft)

    # selection commands

    def select_service(self, service_id: str, jump_to_master: bool = False) -> bool:
        _require_str(service_id, "service_id")
        if self._reference.get_service(service_id) is None:
            self._logger.info("Ignoring unknown service", extra={"service": service_id})
            return False

        staff_id = self._draft.staff_id
        if jump_to_master or (staff_id and not is_eligible(self._reference, service_id, staff_id)):
            staff_id = ""
        step = WizardStep.MASTER if jump_to_master else self._draft.step

        self._update(service_id=service_id, staff_id=staff_id, step=step)
        return True

    def select_staff(self, staff_id: str) -> bool:
        _require_str(staff_id, "staff_id")
        if not is_eligible(self._reference, self._draft.service_id, staff_id):
            self._logger.info(
                "Ignoring ineligible staff",
                extra={"service": self._draft.service_id, "staff": staff_id},
            )
            return False
        self._update(staff_id=staff_id)
        return True

    def set_date(self, date_iso: str) -> None:
        self._update(date=_require_str(date_iso, "date").strip())

    def set_time(self, slot: str) -> bool:
        _require_str(slot, "time")
        if slot not in self._reference.time_slots():
            return False
        if slot in blocked_slots(self._reference, self._draft.staff_id, self._draft.date):
            return False
        self._update(time=slot)
        return True

    # contact commands

    def set_name(self, text: str) -> None:
        self._update(name=_require_str(text, "name"))

    def set_phone(self, text: str) -> None:
        self._update(phone=_require_str(text, "phone"))

    def set_note(self, text: str) -> None:
        self._update(note=_require_str(text, "note"))

    def set_consent(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise InvalidCommandError("consent must be a boolean")
        self._update(consent=value)

    # navigation

    def advance(self) -> bool:
        if not self.can_advance:
            return False
        nxt = WizardStep(min(self._draft.step + 1, WizardStep.CONFIRM))
        self._draft = replace(self._draft, step=nxt)
        return True

    def retreat(self) -> None:
        self._draft = replace(self._draft, step=WizardStep(max(self._draft.step - 1, WizardStep.SERVICE)))

    async def submit(self) -> SubmissionOutcome:
        draft = self._draft
        if draft.sending or draft.sent or draft.step != WizardStep.CONFIRM:
            return SubmissionOutcome.IGNORED
        if not self.can_submit:
            self._logger.info(
                "Ignoring submit of incomplete draft",
                extra={"service": draft.service_id, "staff": draft.staff_id, "status": "ignored"},
            )
            return SubmissionOutcome.IGNORED

        # Flag must be set before the first await so duplicates are rejected.
        self._draft = replace(draft, sending=True, error=None)
        try:
            await self._submitter.execute(self._draft)
        except SubmissionError as e:
            self._draft = replace(self._draft, error=e.message)
            return SubmissionOutcome.FAILED
        finally:
            self._draft = replace(self._draft, sending=False)

        self._draft = replace(self._draft, sent=True, step=WizardStep.CONFIRM)
        return SubmissionOutcome.SENT

    def view(self) -> WizardView:
        draft = self._draft
        blocked = blocked_slots(self._reference, draft.staff_id, draft.date)
        return WizardView(
            draft=draft,
            step_labels=tuple(STEP_LABELS[s] for s in WizardStep),
            can_advance=self.can_advance,
            can_submit=self.can_submit,
            eligible_staff=tuple(eligible_staff(self._reference, draft.service_id)),
            blocked_slots=tuple(blocked),
            slots=tuple(slot_board(self._reference, draft.staff_id, draft.date)),
            summary=self.summary(),
            demo_mode=self._submitter.demo_mode,
        )

    def summary(self) -> BookingSummary:
        draft = self._draft
        service = self._reference.get_service(draft.service_id) if draft.service_id else None
        master = self._reference.get_staff(draft.staff_id) if draft.staff_id else None
        currency = self._reference.salon().currency

        if service:
            service_line = f"{service.name} · {service.duration_minutes}min · {service.price} {currency}"
        else:
            service_line = f"- · ?min · ? {currency}"

        return BookingSummary(
            service=service_line,
            master=master.name if master else "Unassigned",
            when=f"{draft.date or '-'} {draft.time}".rstrip(),
            client=f"{draft.name or '-'} • {draft.phone or '-'}",
            note=draft.note or None,
        )

    def _update(self, **changes: object) -> None:
        """Apply field changes, then drop a time that the new staff/date blocks."""
        draft = replace(self._draft, **changes)
        if draft.time and draft.time in blocked_slots(self._reference, draft.staff_id, draft.date):
            self._logger.info(
                "Clearing blocked time",
                extra={"staff": draft.staff_id, "reason": f"{draft.date} {draft.time} blocked"},
            )
            draft = replace(draft, time="")
        self._draft = draft
