from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CrmPort(ABC):
    demo_mode: bool = False

    @abstractmethod
    async def create_lead(self, fields: dict[str, Any]) -> None:
        """Create a lead from CRM fields. Raises SubmissionError on failure."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release network resources, if any."""
        return None
