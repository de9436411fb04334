from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from app.application.exceptions import WizardNotFoundError
from app.application.ports.wizard_store import WizardStorePort
from app.application.use_cases.booking_wizard import BookingWizard


class MemoryWizardStore(WizardStorePort):
    """In-process wizard sessions. Oldest sessions are evicted past `session_limit`."""

    def __init__(self, session_limit: int = 1000) -> None:
        self._wizards: OrderedDict[str, BookingWizard] = OrderedDict()
        self._session_limit = session_limit
        self._logger = logging.getLogger(__name__)

    def create(self, wizard: BookingWizard) -> str:
        wizard_id = uuid.uuid4().hex
        self._wizards[wizard_id] = wizard
        while len(self._wizards) > self._session_limit:
            evicted, _ = self._wizards.popitem(last=False)
            self._logger.info("Wizard session evicted", extra={"wizard_id": evicted})
        return wizard_id

    def get(self, wizard_id: str) -> BookingWizard:
        try:
            wizard = self._wizards[wizard_id]
        except KeyError:
            raise WizardNotFoundError(f"Unknown wizard session {wizard_id}") from None
        self._wizards.move_to_end(wizard_id)
        return wizard

    def discard(self, wizard_id: str) -> None:
        self._wizards.pop(wizard_id, None)

    def __len__(self) -> int:
        return len(self._wizards)
