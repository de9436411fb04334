from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.catalog import SalonProfile, Service, StaffMember, UnavailabilityRule


class ReferenceDataPort(ABC):
    @abstractmethod
    def salon(self) -> SalonProfile:
        raise NotImplementedError

    @abstractmethod
    def services(self) -> tuple[Service, ...]:
        """All services in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        raise NotImplementedError

    @abstractmethod
    def staff(self) -> tuple[StaffMember, ...]:
        """All staff members in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def get_staff(self, staff_id: str) -> StaffMember | None:
        raise NotImplementedError

    @abstractmethod
    def unavailability(self, staff_id: str) -> UnavailabilityRule | None:
        """Blackout rule for a staff member, or None when they have no rule."""
        raise NotImplementedError

    @abstractmethod
    def time_slots(self) -> tuple[str, ...]:
        """Ordered HH:MM grid of bookable slots."""
        raise NotImplementedError
