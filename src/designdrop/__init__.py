"""Приём файлов из веб-формы, упаковка в zip и рассылка уведомлений."""

__version__ = "0.1.0"
