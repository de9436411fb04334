"""
Shared fixtures: built-in salon catalog, a recording CRM double and a wizard factory.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from app.application.exceptions import SubmissionError
from app.application.ports.crm import CrmPort
from app.application.use_cases.booking_wizard import BookingWizard
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.infrastructure.reference.reference_data_store import ReferenceDataStore


class RecordingCrm(CrmPort):
    """CRM double that records leads; can fail or hold the call open until released."""

    def __init__(self, fail: bool = False, hold: bool = False, demo_mode: bool = False) -> None:
        self.leads: list[dict[str, Any]] = []
        self.fail = fail
        self.demo_mode = demo_mode
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        if not hold:
            self.release.set()

    async def create_lead(self, fields: dict[str, Any]) -> None:
        self.leads.append(fields)
        self.started.set()
        await self.release.wait()
        if self.fail:
            raise SubmissionError()


@pytest.fixture
def reference() -> ReferenceDataStore:
    return ReferenceDataStore()


@pytest.fixture
def crm() -> RecordingCrm:
    return RecordingCrm()


@pytest.fixture
def make_wizard(reference):
    def _make(crm: CrmPort | None = None, today: str = "2025-09-14") -> BookingWizard:
        submitter = SubmitBookingUseCase(reference=reference, crm=crm or RecordingCrm())
        return BookingWizard(reference=reference, submitter=submitter, today=today)

    return _make


def _walk_to_confirm(wizard: BookingWizard) -> None:
    assert wizard.select_service("haircut")
    assert wizard.advance()
    assert wizard.select_staff("nino")
    assert wizard.advance()
    wizard.set_date("2025-09-15")
    assert wizard.set_time("11:00")
    assert wizard.advance()
    wizard.set_name("Ana")
    wizard.set_phone("555 123 456")
    assert wizard.advance()


@pytest.fixture
def walk_to_confirm():
    """Drive a wizard through every step with valid input (Monday 11:00 with Nino)."""
    return _walk_to_confirm
