from __future__ import annotations

import logging
from typing import Any

from app.application.exceptions import SubmissionError
from app.application.ports.crm import CrmPort
from app.application.ports.reference_data import ReferenceDataPort
from app.domain.entities.booking_draft import BookingDraft


class SubmitBookingUseCase:
    def __init__(self, reference: ReferenceDataPort, crm: CrmPort) -> None:
        self._reference = reference
        self._crm = crm
        self._logger = logging.getLogger(__name__)

    @property
    def demo_mode(self) -> bool:
        return self._crm.demo_mode

    async def execute(self, draft: BookingDraft) -> None:
        """Send the draft to the CRM. Raises SubmissionError with a user-facing message on failure."""
        fields = self.build_lead_fields(draft)
        try:
            await self._crm.create_lead(fields)
        except SubmissionError:
            raise
        except Exception as e:
            self._logger.error("CRM submission failed", extra={"reason": str(e)})
            raise SubmissionError() from e

        self._logger.info(
            "Booking submitted",
            extra={"service": draft.service_id, "staff": draft.staff_id, "status": "sent"},
        )

    def build_lead_fields(self, draft: BookingDraft) -> dict[str, Any]:
        service = self._reference.get_service(draft.service_id) if draft.service_id else None
        master = self._reference.get_staff(draft.staff_id) if draft.staff_id else None
        currency = self._reference.salon().currency

        duration = service.duration_minutes if service and service.duration_minutes else "?"
        price = service.price if service and service.price else "?"

        comments = [
            f"Service: {service.name if service else '-'} ({duration} min / {price} {currency})",
            f"Master: {master.name if master else 'Unassigned'}",
            f"When: {draft.date} {draft.time}",
        ]
        if draft.note:
            comments.append(f"Note: {draft.note}")

        return {
            "TITLE": f"Online Booking: {service.name if service else 'Service'} — {draft.date} {draft.time}",
            "NAME": draft.name,
            "PHONE": [{"VALUE": draft.phone, "VALUE_TYPE": "WORK"}],
            "COMMENTS": "\n".join(comments),
            "SOURCE_ID": "WEB",
            "UF_CRM_BOOKING_DATE": draft.date,
            "UF_CRM_BOOKING_TIME": draft.time,
            "UF_CRM_BOOKING_SERVICE": service.name if service else "",
            "UF_CRM_BOOKING_MASTER": master.name if master else "",
        }
