from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.application.exceptions import ReferenceDataError
from app.application.utils.date_parser import is_slot_string
from app.domain.entities.catalog import (
    ReferenceData,
    SalonProfile,
    Service,
    StaffMember,
    UnavailabilityRule,
)

logger = logging.getLogger(__name__)


class SalonSchema(BaseModel):
    name: str
    hours: str = ""
    address: str = ""
    phone: str = ""
    site: str = ""
    currency: str = "GEL"


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration: int = Field(ge=0)
    price: int = Field(ge=0)
    role: str | None = None


class StaffSchema(BaseModel):
    id: str
    name: str
    roles: list[str] = Field(default_factory=list)
    rating: float | None = None


class UnavailabilitySchema(BaseModel):
    default: list[str] = Field(default_factory=list)
    byWeekday: dict[int, list[str]] = Field(default_factory=dict)
    byDate: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("byWeekday")
    @classmethod
    def _weekday_range(cls, value: dict[int, list[str]]) -> dict[int, list[str]]:
        for weekday in value:
            if not 0 <= weekday <= 6:
                raise ValueError(f"weekday {weekday} outside 0 (Sunday)..6 (Saturday)")
        return value


class CatalogFileSchema(BaseModel):
    """On-disk catalog layout, same field names as the landing page fixtures."""

    salon: SalonSchema
    services: list[ServiceSchema] = Field(min_length=1)
    masters: list[StaffSchema] = Field(min_length=1)
    timeSlots: list[str] = Field(min_length=1)
    unavailable: dict[str, UnavailabilitySchema] = Field(default_factory=dict)

    @field_validator("timeSlots")
    @classmethod
    def _slots_are_times(cls, value: list[str]) -> list[str]:
        bad = [slot for slot in value if not is_slot_string(slot)]
        if bad:
            raise ValueError(f"time slots must be HH:MM, got {bad}")
        return value

    def to_reference_data(self) -> ReferenceData:
        return ReferenceData(
            salon=SalonProfile(**self.salon.model_dump()),
            services=tuple(
                Service(id=s.id, name=s.name, duration_minutes=s.duration, price=s.price, role=s.role)
                for s in self.services
            ),
            staff=tuple(
                StaffMember(id=m.id, name=m.name, roles=tuple(m.roles), rating=m.rating)
                for m in self.masters
            ),
            unavailability={
                staff_id: UnavailabilityRule(
                    default=tuple(rule.default),
                    by_weekday={k: tuple(v) for k, v in rule.byWeekday.items()},
                    by_date={k: tuple(v) for k, v in rule.byDate.items()},
                )
                for staff_id, rule in self.unavailable.items()
            },
            # keep grid order as written, drop repeats
            time_slots=tuple(dict.fromkeys(self.timeSlots)),
        )


def load_reference_data(path: str | Path) -> ReferenceData:
    """Load and validate a JSON catalog file. Raises ReferenceDataError on any problem."""
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Cannot read salon catalog {file_path}: {e}") from e

    try:
        catalog = CatalogFileSchema.model_validate(raw)
    except ValidationError as e:
        raise ReferenceDataError(f"Invalid salon catalog {file_path}: {e}") from e

    logger.info(
        "Salon catalog loaded",
        extra={"reason": str(file_path)},
    )
    return catalog.to_reference_data()
