"""HTTP-слой: приложение FastAPI и маршруты."""
