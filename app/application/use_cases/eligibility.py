from __future__ import annotations

from app.application.ports.reference_data import ReferenceDataPort
from app.domain.entities.catalog import StaffMember


def eligible_staff(reference: ReferenceDataPort, service_id: str | None) -> list[StaffMember]:
    """Staff qualified for a service; the whole catalog when the service has no required role."""
    service = reference.get_service(service_id) if service_id else None
    if service is None or not service.role:
        return list(reference.staff())
    return [member for member in reference.staff() if service.role in member.roles]


def is_eligible(reference: ReferenceDataPort, service_id: str | None, staff_id: str) -> bool:
    return any(member.id == staff_id for member in eligible_staff(reference, service_id))
