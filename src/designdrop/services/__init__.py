"""Внешние сервисы: почтовый провайдер и уведомления."""

from .email_client import EmailClient, EmailDeliveryError
from .notifier import Notifier

__all__ = ["EmailClient", "EmailDeliveryError", "Notifier"]
