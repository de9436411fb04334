from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from app.domain.entities.catalog import (
    ReferenceData,
    SalonProfile,
    Service,
    StaffMember,
    UnavailabilityRule,
)

SALON = SalonProfile(
    name="Beauty Salon Natali",
    hours="Every day 10:00 - 20:00",
    address="Zakaria Paliashvili Street, 56, Tbilisi",
    phone="+995 555 80-00-02",
    site="https://www.natali.ge",
    currency="GEL",
)

SERVICES: tuple[Service, ...] = (
    Service(id="haircut", name="Haircut", duration_minutes=45, price=50, role="Stylist"),
    Service(id="color", name="Hair coloring", duration_minutes=120, price=180, role="Stylist"),
    Service(id="manicure", name="Manicure", duration_minutes=60, price=70, role="Nails"),
    Service(id="pedicure", name="Pedicure", duration_minutes=75, price=90, role="Nails"),
)

STAFF: tuple[StaffMember, ...] = (
    StaffMember(id="nino", name="Nino", roles=("Stylist",), rating=4.9),
    StaffMember(id="dato", name="Dato", roles=("Stylist",), rating=4.8),
    StaffMember(id="mariam", name="Mariam", roles=("Nails",), rating=4.9),
)

TIME_SLOTS: tuple[str, ...] = (
    "10:00", "10:30", "11:00", "11:30", "12:00", "12:30",
    "13:00", "13:30", "14:00", "14:30", "15:00", "15:30",
    "16:00", "16:30", "17:00", "17:30", "18:00", "18:30",
)

UNAVAILABILITY: Mapping[str, UnavailabilityRule] = MappingProxyType({
    "nino": UnavailabilityRule(
        default=("15:30",),
        by_weekday={1: ("10:00",)},
        by_date={"2025-09-14": ("12:00", "12:30")},
    ),
    "dato": UnavailabilityRule(
        by_weekday={6: ("17:00", "17:30")},
    ),
    "mariam": UnavailabilityRule(),
})


def build_default_reference_data() -> ReferenceData:
    return ReferenceData(
        salon=SALON,
        services=SERVICES,
        staff=STAFF,
        unavailability=UNAVAILABILITY,
        time_slots=TIME_SLOTS,
    )
