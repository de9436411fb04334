from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import SubmissionError
from app.application.ports.crm import CrmPort
from app.infrastructure.crm.bitrix_client import BitrixClient


class BitrixCrm(CrmPort):
    demo_mode = False

    def __init__(self, client: BitrixClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    async def create_lead(self, fields: dict[str, Any]) -> None:
        try:
            await self._client.add_lead(fields)
        except httpx.HTTPError as e:
            self._logger.error("Bitrix webhook unreachable", extra={"reason": str(e)})
            raise SubmissionError() from e

    async def aclose(self) -> None:
        await self._client.aclose()
