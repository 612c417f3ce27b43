"""Обёртка для отправки писем через Resend API."""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

import httpx

from ..models import EmailMessage


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.resend.com"


class EmailDeliveryError(RuntimeError):
    """Исключение при обращении к почтовому провайдеру."""


def build_payload(message: EmailMessage) -> Dict[str, Any]:
    """Преобразовать ``message`` в тело запроса ``POST /emails``."""
    payload: Dict[str, Any] = {
        "from": message.sender,
        "to": [message.to],
        "subject": message.subject,
        "html": message.html,
    }
    if message.attachments:
        payload["attachments"] = [
            {
                "filename": item.filename,
                "content": item.content,
                "content_type": item.content_type,
            }
            for item in message.attachments
        ]
    return payload


class EmailClient:
    """Async client for a Resend-compatible transactional email API.

    Each call is a single attempt: no retries and no idempotency key.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: Optional[str] = None,
        timeout: float | None = 30.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        """Отправить письмо и вернуть ответ провайдера."""
        if not self.api_key:
            raise EmailDeliveryError("RESEND_API_KEY environment variable required")

        api_url = self.base_url + "/emails"
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    api_url, json=build_payload(message), headers=headers
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                logger.error(
                    "Email API rejected message to %s: %s %s",
                    message.to,
                    status,
                    exc.response.text,
                )
                raise EmailDeliveryError(f"Email API request failed: {status}") from exc
            except httpx.HTTPError as exc:
                logger.error("HTTP error during email request: %s", exc)
                raise EmailDeliveryError("HTTP error during email request") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"response": data}
        logger.info("Email sent to %s (id=%s)", message.to, data.get("id"))
        return data


__all__ = ["EmailClient", "EmailDeliveryError", "build_payload"]
