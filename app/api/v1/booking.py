from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.api.v1.schemas import (
    CommandResponseSchema,
    ContactRequestSchema,
    SalonSchema,
    ScheduleRequestSchema,
    SelectServiceRequestSchema,
    SelectStaffRequestSchema,
    ServiceSchema,
    SlotSchema,
    StaffSchema,
    SubmitResponseSchema,
    WizardSchema,
)
from app.application.exceptions import InvalidCommandError, WizardNotFoundError
from app.application.ports.crm import CrmPort
from app.application.ports.reference_data import ReferenceDataPort
from app.application.ports.wizard_store import WizardStorePort
from app.application.use_cases.availability import slot_board
from app.application.use_cases.booking_wizard import BookingWizard
from app.application.use_cases.eligibility import eligible_staff
from app.wiring.dependencies import get_crm, get_reference_data, get_wizard_factory, get_wizard_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _load(store: WizardStorePort, wizard_id: str) -> BookingWizard:
    try:
        return store.get(wizard_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _command(wizard_id: str, wizard: BookingWizard, accepted: bool) -> CommandResponseSchema:
    return CommandResponseSchema(
        accepted=accepted,
        wizard=WizardSchema.from_view(wizard_id, wizard.view()),
    )


@router.get("/salon", response_model=SalonSchema)
def get_salon(
    reference: ReferenceDataPort = Depends(get_reference_data),
    crm: CrmPort = Depends(get_crm),
):
    return SalonSchema.from_entity(reference.salon(), demo_mode=crm.demo_mode)


@router.get("/services", response_model=list[ServiceSchema])
def list_services(reference: ReferenceDataPort = Depends(get_reference_data)):
    return [ServiceSchema.from_entity(s) for s in reference.services()]


@router.get("/staff", response_model=list[StaffSchema])
def list_staff(
    service_id: str | None = Query(None),
    reference: ReferenceDataPort = Depends(get_reference_data),
):
    return [StaffSchema.from_entity(m) for m in eligible_staff(reference, service_id)]


@router.get("/slots", response_model=list[SlotSchema])
def list_slots(
    staff_id: str = Query(""),
    date: str = Query(""),
    reference: ReferenceDataPort = Depends(get_reference_data),
):
    return [SlotSchema(time=s.time, available=s.available) for s in slot_board(reference, staff_id, date)]


@router.post("/wizards", response_model=WizardSchema, status_code=201)
def create_wizard(
    store: WizardStorePort = Depends(get_wizard_store),
    factory: Callable[[], BookingWizard] = Depends(get_wizard_factory),
):
    wizard = factory()
    wizard_id = store.create(wizard)
    logger.info("Wizard started", extra={"wizard_id": wizard_id})
    return WizardSchema.from_view(wizard_id, wizard.view())


@router.get("/wizards/{wizard_id}", response_model=WizardSchema)
def get_wizard(wizard_id: str, store: WizardStorePort = Depends(get_wizard_store)):
    wizard = _load(store, wizard_id)
    return WizardSchema.from_view(wizard_id, wizard.view())


@router.delete("/wizards/{wizard_id}", status_code=204)
def discard_wizard(wizard_id: str, store: WizardStorePort = Depends(get_wizard_store)) -> Response:
    _load(store, wizard_id)
    store.discard(wizard_id)
    return Response(status_code=204)


@router.post("/wizards/{wizard_id}/service", response_model=CommandResponseSchema)
def select_service(
    wizard_id: str,
    req: SelectServiceRequestSchema,
    store: WizardStorePort = Depends(get_wizard_store),
):
    wizard = _load(store, wizard_id)
    accepted = wizard.select_service(req.service_id, jump_to_master=req.jump_to_master)
    return _command(wizard_id, wizard, accepted)


@router.post("/wizards/{wizard_id}/staff", response_model=CommandResponseSchema)
def select_staff(
    wizard_id: str,
    req: SelectStaffRequestSchema,
    store: WizardStorePort = Depends(get_wizard_store),
):
    wizard = _load(store, wizard_id)
    accepted = wizard.select_staff(req.staff_id)
    return _command(wizard_id, wizard, accepted)


@router.post("/wizards/{wizard_id}/schedule", response_model=CommandResponseSchema)
def set_schedule(
    wizard_id: str,
    req: ScheduleRequestSchema,
    store: WizardStorePort = Depends(get_wizard_store),
):
    wizard = _load(store, wizard_id)
    accepted = True
    try:
        if req.date is not None:
            wizard.set_date(req.date)
        if req.time is not None:
            accepted = wizard.set_time(req.time)
    except InvalidCommandError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _command(wizard_id, wizard, accepted)


@router.post("/wizards/{wizard_id}/contact", response_model=CommandResponseSchema)
def set_contact(
    wizard_id: str,
    req: ContactRequestSchema,
    store: WizardStorePort = Depends(get_wizard_store),
):
    wizard = _load(store, wizard_id)
    try:
        if req.name is not None:
            wizard.set_name(req.name)
        if req.phone is not None:
            wizard.set_phone(req.phone)
        if req.note is not None:
            wizard.set_note(req.note)
        if req.consent is not None:
            wizard.set_consent(req.consent)
    except InvalidCommandError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _command(wizard_id, wizard, True)


@router.post("/wizards/{wizard_id}/advance", response_model=CommandResponseSchema)
def advance(wizard_id: str, store: WizardStorePort = Depends(get_wizard_store)):
    wizard = _load(store, wizard_id)
    return _command(wizard_id, wizard, wizard.advance())


@router.post("/wizards/{wizard_id}/retreat", response_model=CommandResponseSchema)
def retreat(wizard_id: str, store: WizardStorePort = Depends(get_wizard_store)):
    wizard = _load(store, wizard_id)
    wizard.retreat()
    return _command(wizard_id, wizard, True)


@router.post("/wizards/{wizard_id}/submit", response_model=SubmitResponseSchema)
async def submit(wizard_id: str, store: WizardStorePort = Depends(get_wizard_store)):
    wizard = _load(store, wizard_id)
    outcome = await wizard.submit()
    logger.info(
        "Wizard submit",
        extra={"wizard_id": wizard_id, "status": outcome.value, "step": wizard.step.label},
    )
    return SubmitResponseSchema(
        outcome=outcome,
        wizard=WizardSchema.from_view(wizard_id, wizard.view()),
    )
