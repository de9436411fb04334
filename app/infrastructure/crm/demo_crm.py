from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.ports.crm import CrmPort


class DemoCrm(CrmPort):
    """Stands in for the CRM when no webhook is configured: waits, then always succeeds."""

    demo_mode = True

    def __init__(self, delay_seconds: float = 0.7) -> None:
        self._delay_seconds = delay_seconds
        self._logger = logging.getLogger(__name__)

    async def create_lead(self, fields: dict[str, Any]) -> None:
        await asyncio.sleep(self._delay_seconds)
        self._logger.info(
            "Demo CRM lead accepted",
            extra={"reason": fields.get("TITLE"), "status": "demo"},
        )
