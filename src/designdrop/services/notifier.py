"""Формирование и отправка уведомлений о новой заявке."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..archive import Archive
from ..errors import NotificationDispatchError
from ..models import EmailMessage, Preview, SubmissionRecord
from .email_client import EmailClient, EmailDeliveryError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
CONFIRMATION_SUBJECT = "Your Design Upload Was Received"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


class Notifier:
    """Builds the operator and submitter emails and sends them in order."""

    def __init__(
        self,
        client: EmailClient,
        *,
        sender: str,
        operator_email: str,
        brand_name: str,
    ) -> None:
        self.client = client
        self.sender = sender
        self.operator_email = operator_email
        self.brand_name = brand_name

    def operator_message(
        self,
        record: SubmissionRecord,
        archive: Archive,
        preview: Optional[Preview] = None,
    ) -> EmailMessage:
        html = _env.get_template("operator.html").render(
            record=record, preview=preview, brand_name=self.brand_name
        )
        return EmailMessage(
            sender=self.sender,
            to=self.operator_email,
            subject=f"New Design Upload from {record.name}",
            html=html,
            attachments=[archive.to_attachment()],
        )

    def confirmation_message(self, record: SubmissionRecord) -> EmailMessage:
        html = _env.get_template("confirmation.html").render(
            record=record, brand_name=self.brand_name
        )
        return EmailMessage(
            sender=self.sender,
            to=record.email,
            subject=CONFIRMATION_SUBJECT,
            html=html,
        )

    async def notify(
        self,
        record: SubmissionRecord,
        archive: Archive,
        preview: Optional[Preview] = None,
    ) -> None:
        """Отправить письмо оператору, затем подтверждение заявителю.

        Ошибка первой отправки прерывает цепочку: подтверждение не уходит.
        """
        messages = (
            self.operator_message(record, archive, preview),
            self.confirmation_message(record),
        )
        for message in messages:
            try:
                await self.client.send(message)
            except EmailDeliveryError as exc:
                logger.error("Email error for %s: %s", message.to, exc)
                raise NotificationDispatchError() from exc


__all__ = ["Notifier", "CONFIRMATION_SUBJECT", "TEMPLATES_DIR"]
