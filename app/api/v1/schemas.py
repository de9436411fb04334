from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.entities.booking_draft import WizardStep
from app.domain.entities.catalog import SalonProfile, Service, StaffMember
from app.domain.entities.submission import SubmissionOutcome
from app.domain.entities.wizard_view import WizardView


class SalonSchema(BaseModel):
    name: str
    hours: str
    address: str
    phone: str
    site: str
    currency: str
    demo_mode: bool

    @classmethod
    def from_entity(cls, salon: SalonProfile, demo_mode: bool) -> "SalonSchema":
        return cls(
            name=salon.name,
            hours=salon.hours,
            address=salon.address,
            phone=salon.phone,
            site=salon.site,
            currency=salon.currency,
            demo_mode=demo_mode,
        )


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration_minutes: int
    price: int
    role: str | None = None

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            duration_minutes=service.duration_minutes,
            price=service.price,
            role=service.role,
        )


class StaffSchema(BaseModel):
    id: str
    name: str
    roles: list[str] = Field(default_factory=list)
    rating: float | None = None

    @classmethod
    def from_entity(cls, member: StaffMember) -> "StaffSchema":
        return cls(id=member.id, name=member.name, roles=list(member.roles), rating=member.rating)


class SlotSchema(BaseModel):
    time: str
    available: bool


class SummarySchema(BaseModel):
    service: str
    master: str
    when: str
    client: str
    note: str | None = None


class DraftSchema(BaseModel):
    service_id: str
    staff_id: str
    date: str
    time: str
    name: str
    phone: str
    note: str
    consent: bool


class WizardSchema(BaseModel):
    id: str
    step: WizardStep
    step_label: str
    step_labels: list[str]
    can_advance: bool
    can_submit: bool
    draft: DraftSchema
    eligible_staff: list[StaffSchema]
    blocked_slots: list[str]
    slots: list[SlotSchema]
    summary: SummarySchema
    sending: bool
    sent: bool
    error: str | None = None
    demo_mode: bool

    @classmethod
    def from_view(cls, wizard_id: str, view: WizardView) -> "WizardSchema":
        draft = view.draft
        return cls(
            id=wizard_id,
            step=draft.step,
            step_label=draft.step.label,
            step_labels=list(view.step_labels),
            can_advance=view.can_advance,
            can_submit=view.can_submit,
            draft=DraftSchema(
                service_id=draft.service_id,
                staff_id=draft.staff_id,
                date=draft.date,
                time=draft.time,
                name=draft.name,
                phone=draft.phone,
                note=draft.note,
                consent=draft.consent,
            ),
            eligible_staff=[StaffSchema.from_entity(m) for m in view.eligible_staff],
            blocked_slots=list(view.blocked_slots),
            slots=[SlotSchema(time=s.time, available=s.available) for s in view.slots],
            summary=SummarySchema(
                service=view.summary.service,
                master=view.summary.master,
                when=view.summary.when,
                client=view.summary.client,
                note=view.summary.note,
            ),
            sending=draft.sending,
            sent=draft.sent,
            error=draft.error,
            demo_mode=view.demo_mode,
        )


class SelectServiceRequestSchema(BaseModel):
    service_id: str
    jump_to_master: bool = False


class SelectStaffRequestSchema(BaseModel):
    staff_id: str


class ScheduleRequestSchema(BaseModel):
    date: str | None = None
    time: str | None = None


class ContactRequestSchema(BaseModel):
    name: str | None = None
    phone: str | None = None
    note: str | None = None
    consent: bool | None = None


class SubmitResponseSchema(BaseModel):
    outcome: SubmissionOutcome
    wizard: WizardSchema


class CommandResponseSchema(BaseModel):
    accepted: bool
    wizard: WizardSchema
