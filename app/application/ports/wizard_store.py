from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.application.use_cases.booking_wizard import BookingWizard


class WizardStorePort(ABC):
    @abstractmethod
    def create(self, wizard: "BookingWizard") -> str:
        """Register a wizard and return its session id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, wizard_id: str) -> "BookingWizard":
        """Return the wizard. Raises WizardNotFoundError when unknown."""
        raise NotImplementedError

    @abstractmethod
    def discard(self, wizard_id: str) -> None:
        raise NotImplementedError
