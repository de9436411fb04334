from __future__ import annotations

import logging
from typing import Any

import httpx


class BitrixClient:
    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    async def add_lead(self, fields: dict[str, Any]) -> None:
        payload = {"fields": fields}
        resp = await self._client.post(self._webhook_url, json=payload)
        if not resp.is_success:
            try:
                error_json = resp.json()
                error_code = error_json.get("error")
                error_message = error_json.get("error_description")
            except Exception:
                error_code = None
                error_message = resp.text

            self._logger.error(
                "Bitrix lead creation failed",
                extra={
                    "status": resp.status_code,
                    "error_code": error_code,
                    "reason": error_message,
                },
            )
            resp.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()
