"""
Tests for CRM lead building and the demo/live submission paths.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.application.exceptions import SubmissionError
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.domain.entities.booking_draft import BookingDraft, WizardStep
from app.domain.entities.submission import SubmissionOutcome
from app.infrastructure.crm.bitrix_client import BitrixClient
from app.infrastructure.crm.bitrix_crm import BitrixCrm
from app.infrastructure.crm.demo_crm import DemoCrm

from conftest import RecordingCrm

WEBHOOK = "https://example.bitrix24.ru/rest/1/token/crm.lead.add.json"


def _bitrix(handler) -> BitrixCrm:
    client = BitrixClient(webhook_url=WEBHOOK, transport=httpx.MockTransport(handler))
    return BitrixCrm(client=client)


def test_lead_fields(reference):
    use_case = SubmitBookingUseCase(reference=reference, crm=RecordingCrm())
    draft = BookingDraft(
        service_id="color",
        staff_id="dato",
        date="2025-09-13",
        time="11:30",
        name="Ana",
        phone="555123456",
        note="first visit",
    )
    fields = use_case.build_lead_fields(draft)

    assert fields["TITLE"] == "Online Booking: Hair coloring — 2025-09-13 11:30"
    assert fields["NAME"] == "Ana"
    assert fields["PHONE"] == [{"VALUE": "555123456", "VALUE_TYPE": "WORK"}]
    assert fields["COMMENTS"] == (
        "Service: Hair coloring (120 min / 180 GEL)\n"
        "Master: Dato\n"
        "When: 2025-09-13 11:30\n"
        "Note: first visit"
    )
    assert fields["SOURCE_ID"] == "WEB"
    assert fields["UF_CRM_BOOKING_DATE"] == "2025-09-13"
    assert fields["UF_CRM_BOOKING_TIME"] == "11:30"
    assert fields["UF_CRM_BOOKING_SERVICE"] == "Hair coloring"
    assert fields["UF_CRM_BOOKING_MASTER"] == "Dato"


def test_lead_fields_without_staff_or_note(reference):
    use_case = SubmitBookingUseCase(reference=reference, crm=RecordingCrm())
    fields = use_case.build_lead_fields(BookingDraft(service_id="haircut", date="2025-09-15", time="10:30"))

    assert "Master: Unassigned" in fields["COMMENTS"]
    assert "Note:" not in fields["COMMENTS"]
    assert fields["UF_CRM_BOOKING_MASTER"] == ""


@pytest.mark.asyncio
async def test_submit_from_non_confirm_step_is_ignored(make_wizard, crm):
    wizard = make_wizard(crm=crm)
    assert await wizard.submit() == SubmissionOutcome.IGNORED
    assert crm.leads == []


@pytest.mark.asyncio
async def test_demo_mode_always_succeeds(make_wizard, walk_to_confirm):
    wizard = make_wizard(crm=DemoCrm(delay_seconds=0))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.SENT
    assert wizard.draft.sent is True
    assert wizard.draft.sending is False
    assert wizard.step == WizardStep.CONFIRM
    assert wizard.view().demo_mode is True


@pytest.mark.asyncio
async def test_demo_crm_waits_for_the_configured_delay():
    with patch("app.infrastructure.crm.demo_crm.asyncio.sleep", new=AsyncMock()) as sleep:
        await DemoCrm(delay_seconds=0.7).create_lead({"TITLE": "x"})
    sleep.assert_awaited_once_with(0.7)


@pytest.mark.asyncio
async def test_live_mode_posts_fields_and_succeeds_on_2xx(make_wizard, walk_to_confirm):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"result": 17})

    wizard = make_wizard(crm=_bitrix(handler))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.SENT
    assert wizard.draft.sent is True

    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == WEBHOOK
    body = json.loads(requests[0].content)
    assert body["fields"]["UF_CRM_BOOKING_SERVICE"] == "Haircut"
    assert body["fields"]["UF_CRM_BOOKING_MASTER"] == "Nino"


@pytest.mark.asyncio
async def test_live_mode_non_2xx_fails_and_stays_on_step(make_wizard, walk_to_confirm):
    wizard = make_wizard(crm=_bitrix(lambda request: httpx.Response(503, text="down")))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.FAILED
    draft = wizard.draft
    assert draft.sent is False
    assert draft.sending is False
    assert draft.step == WizardStep.CONFIRM
    assert "BITRIX_WEBHOOK_URL" in draft.error


@pytest.mark.asyncio
async def test_live_mode_transport_error_fails(make_wizard, walk_to_confirm):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    wizard = make_wizard(crm=_bitrix(handler))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.FAILED
    assert wizard.draft.error == SubmissionError().message


@pytest.mark.asyncio
async def test_manual_retry_after_failure(make_wizard, walk_to_confirm):
    statuses = [500, 201]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(statuses.pop(0))

    wizard = make_wizard(crm=_bitrix(handler))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.FAILED
    assert await wizard.submit() == SubmissionOutcome.SENT
    assert wizard.draft.error is None
    assert statuses == []


@pytest.mark.asyncio
async def test_unexpected_crm_exception_becomes_submission_error(reference):
    class BrokenCrm(RecordingCrm):
        async def create_lead(self, fields):
            raise KeyError("boom")

    use_case = SubmitBookingUseCase(reference=reference, crm=BrokenCrm())
    with pytest.raises(SubmissionError):
        await use_case.execute(BookingDraft(service_id="haircut"))


@pytest.mark.asyncio
async def test_duplicate_submit_while_in_flight_is_ignored(make_wizard, walk_to_confirm):
    crm = RecordingCrm(hold=True)
    wizard = make_wizard(crm=crm)
    walk_to_confirm(wizard)

    first = asyncio.create_task(wizard.submit())
    await crm.started.wait()
    assert wizard.draft.sending is True

    assert await wizard.submit() == SubmissionOutcome.IGNORED

    crm.release.set()
    assert await first == SubmissionOutcome.SENT
    assert len(crm.leads) == 1


@pytest.mark.asyncio
async def test_submit_after_sent_is_ignored(make_wizard, walk_to_confirm, crm):
    wizard = make_wizard(crm=crm)
    walk_to_confirm(wizard)
    assert await wizard.submit() == SubmissionOutcome.SENT
    assert await wizard.submit() == SubmissionOutcome.IGNORED
    assert len(crm.leads) == 1


@pytest.mark.asyncio
async def test_failed_crm_double_reports_failure(make_wizard, walk_to_confirm):
    wizard = make_wizard(crm=RecordingCrm(fail=True))
    walk_to_confirm(wizard)
    assert await wizard.submit() == SubmissionOutcome.FAILED
    assert wizard.step == WizardStep.CONFIRM


@pytest.mark.asyncio
async def test_submit_after_edits_on_confirm_rechecks_every_step(make_wizard, walk_to_confirm, crm):
    wizard = make_wizard(crm=crm)
    walk_to_confirm(wizard)

    # manicure needs a Nails master, so Nino is dropped while the step stays on Confirm
    assert wizard.select_service("manicure")
    assert wizard.draft.staff_id == ""
    assert wizard.step == WizardStep.CONFIRM
    assert wizard.can_submit is False

    assert await wizard.submit() == SubmissionOutcome.IGNORED
    assert crm.leads == []
    assert wizard.draft.sent is False


@pytest.mark.asyncio
async def test_submit_with_cleared_contact_on_confirm_is_ignored(make_wizard, walk_to_confirm, crm):
    wizard = make_wizard(crm=crm)
    walk_to_confirm(wizard)
    wizard.set_phone("")
    wizard.set_consent(False)

    assert await wizard.submit() == SubmissionOutcome.IGNORED
    assert crm.leads == []

    wizard.set_phone("555 123 456")
    wizard.set_consent(True)
    assert wizard.can_submit is True
    assert await wizard.submit() == SubmissionOutcome.SENT
    assert len(crm.leads) == 1


@pytest.mark.asyncio
async def test_live_mode_redirect_is_a_failure(make_wizard, walk_to_confirm):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "https://example.bitrix24.ru/auth/"})

    wizard = make_wizard(crm=_bitrix(handler))
    walk_to_confirm(wizard)

    assert await wizard.submit() == SubmissionOutcome.FAILED
    assert wizard.draft.sent is False
    assert wizard.draft.error == SubmissionError().message
