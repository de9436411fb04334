from __future__ import annotations

from app.application.ports.reference_data import ReferenceDataPort
from app.application.utils.date_parser import slot_sort_key, weekday_of
from app.domain.entities.wizard_view import SlotState


def blocked_slots(reference: ReferenceDataPort, staff_id: str, date_iso: str) -> list[str]:
    """
    Time slots a staff member cannot take on a date.

    Union of the rule's default, weekday and exact-date tiers, restricted to
    the salon's slot grid and returned in chronological order. Unknown staff
    or an empty rule yield []. A malformed date only disables the weekday tier.
    """
    rule = reference.unavailability(staff_id) if staff_id else None
    if rule is None:
        return []

    out: set[str] = set(rule.default)

    weekday = weekday_of(date_iso)
    if weekday is not None:
        out.update(rule.by_weekday.get(weekday, ()))

    out.update(rule.by_date.get(date_iso, ()))

    grid = set(reference.time_slots())
    return sorted((t for t in out if t in grid), key=slot_sort_key)


def slot_board(reference: ReferenceDataPort, staff_id: str, date_iso: str) -> list[SlotState]:
    """Every grid slot with its availability for the staff member and date."""
    blocked = set(blocked_slots(reference, staff_id, date_iso))
    return [SlotState(time=t, available=t not in blocked) for t in reference.time_slots()]
