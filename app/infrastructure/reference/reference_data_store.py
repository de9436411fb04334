from __future__ import annotations

from app.application.ports.reference_data import ReferenceDataPort
from app.domain.entities.catalog import (
    ReferenceData,
    SalonProfile,
    Service,
    StaffMember,
    UnavailabilityRule,
)
from app.infrastructure.reference.salon_fixtures import build_default_reference_data


class ReferenceDataStore(ReferenceDataPort):
    def __init__(self, data: ReferenceData | None = None) -> None:
        self._data = data or build_default_reference_data()
        self._services = {s.id: s for s in self._data.services}
        self._staff = {m.id: m for m in self._data.staff}

    def salon(self) -> SalonProfile:
        return self._data.salon

    def services(self) -> tuple[Service, ...]:
        return self._data.services

    def get_service(self, service_id: str) -> Service | None:
        return self._services.get(service_id)

    def staff(self) -> tuple[StaffMember, ...]:
        return self._data.staff

    def get_staff(self, staff_id: str) -> StaffMember | None:
        return self._staff.get(staff_id)

    def unavailability(self, staff_id: str) -> UnavailabilityRule | None:
        return self._data.unavailability.get(staff_id)

    def time_slots(self) -> tuple[str, ...]:
        return self._data.time_slots
