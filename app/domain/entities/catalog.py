from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    duration_minutes: int
    price: int
    role: str | None = None  # staff role tag required to perform it


@dataclass(frozen=True)
class StaffMember:
    id: str
    name: str
    roles: tuple[str, ...] = ()
    rating: float | None = None


@dataclass(frozen=True)
class UnavailabilityRule:
    default: tuple[str, ...] = ()
    by_weekday: Mapping[int, tuple[str, ...]] = field(default_factory=dict)  # 0=Sunday..6=Saturday
    by_date: Mapping[str, tuple[str, ...]] = field(default_factory=dict)  # YYYY-MM-DD

    def __post_init__(self) -> None:
        object.__setattr__(self, "default", tuple(self.default))
        object.__setattr__(self, "by_weekday", _frozen({k: tuple(v) for k, v in self.by_weekday.items()}))
        object.__setattr__(self, "by_date", _frozen({k: tuple(v) for k, v in self.by_date.items()}))


@dataclass(frozen=True)
class SalonProfile:
    name: str
    hours: str
    address: str
    phone: str
    site: str
    currency: str = "GEL"


@dataclass(frozen=True)
class ReferenceData:
    salon: SalonProfile
    services: tuple[Service, ...]
    staff: tuple[StaffMember, ...]
    unavailability: Mapping[str, UnavailabilityRule]
    time_slots: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", tuple(self.services))
        object.__setattr__(self, "staff", tuple(self.staff))
        object.__setattr__(self, "unavailability", _frozen(self.unavailability))
        object.__setattr__(self, "time_slots", tuple(self.time_slots))
