#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/wizard_local.py

Drives one BookingWizard built through the app wiring, so BITRIX_WEBHOOK_URL
decides between demo and live submission exactly like the API does.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.exceptions import InvalidCommandError  # noqa: E402
from app.application.use_cases.booking_wizard import BookingWizard  # noqa: E402
from app.wiring.dependencies import new_booking_wizard  # noqa: E402

HELP = """Commands:
  service <id> [jump]   select a service (jump = landing shortcut to Master)
  staff <id>            select a master
  date <YYYY-MM-DD>     set the date
  time <HH:MM>          pick a slot
  name <text> | phone <text> | note <text>
  consent on|off
  next | back | submit | show | new | help | quit"""


def _print_view(wizard: BookingWizard) -> None:
    view = wizard.view()
    draft = view.draft
    print("-" * 60)
    print(f"step: {draft.step.value + 1}/{len(view.step_labels)} {draft.step.label}  can_advance={view.can_advance}")
    if view.demo_mode:
        print("(demo mode)")
    print(f"service={draft.service_id or '-'} staff={draft.staff_id or '-'} date={draft.date} time={draft.time or '-'}")
    print(f"eligible: {', '.join(f'{m.id} ★{m.rating}' for m in view.eligible_staff)}")
    print("slots:    " + " ".join(s.time if s.available else "--:--" for s in view.slots))
    print(f"summary:  {view.summary.service} | {view.summary.master} | {view.summary.when} | {view.summary.client}")
    if draft.error:
        print(f"error: {draft.error}")
    if draft.sent:
        print("Sent successfully! We will contact you to confirm.")
    print("-" * 60)


async def _run(wizard: BookingWizard, command: str, arg: str) -> BookingWizard:
    if command == "service":
        parts = arg.split()
        ok = bool(parts) and wizard.select_service(parts[0], jump_to_master="jump" in parts[1:])
    elif command == "staff":
        ok = wizard.select_staff(arg)
    elif command == "date":
        wizard.set_date(arg)
        ok = True
    elif command == "time":
        ok = wizard.set_time(arg)
    elif command == "name":
        wizard.set_name(arg)
        ok = True
    elif command == "phone":
        wizard.set_phone(arg)
        ok = True
    elif command == "note":
        wizard.set_note(arg)
        ok = True
    elif command == "consent":
        wizard.set_consent(arg.lower() in {"on", "yes", "true", "1"})
        ok = True
    elif command == "next":
        ok = wizard.advance()
    elif command == "back":
        wizard.retreat()
        ok = True
    elif command == "submit":
        print("Sending...")
        print(f"outcome: {(await wizard.submit()).value}")
        ok = True
    elif command == "new":
        return new_booking_wizard()
    else:
        print(HELP)
        return wizard

    if not ok:
        print("(ignored)")
    return wizard


async def main() -> None:
    wizard = new_booking_wizard()
    print("\nLocal Booking Harness")
    print(HELP)
    _print_view(wizard)

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue
        if line in {"quit", "/quit", "exit"}:
            break
        command, _, arg = line.partition(" ")
        if command == "show":
            _print_view(wizard)
            continue
        try:
            wizard = await _run(wizard, command, arg.strip())
        except InvalidCommandError as e:
            print(f"invalid: {e}")
            continue
        _print_view(wizard)


if __name__ == "__main__":
    asyncio.run(main())
