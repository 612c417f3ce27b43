"""Console entry for the designdrop upload backend.

``designdrop`` (or ``python -m designdrop.main``) serves ``/upload`` and
``/admin`` with uvicorn; limits, mail credentials and the log path come from
``Settings``.
"""

from __future__ import annotations

import logging
import os
import sys

import uvicorn

from designdrop.config import config
from designdrop.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Configure logging and run uvicorn.

    Bind address comes from ``HOST``/``PORT`` (``0.0.0.0:3000``, the port the
    upload form posts to); ``RELOAD=true`` enables auto-reload.
    """

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    reload = os.getenv("RELOAD", "false").lower() in {"1", "true", "yes"}

    setup_logging(config.log_level, config.log_file)
    if not config.resend_api_key:
        logger.warning("RESEND_API_KEY is not set; every upload will fail at the email step")
    logger.info(
        "designdrop listening on %s:%s, submissions logged to %s",
        host,
        port,
        config.log_store_path,
    )

    try:
        uvicorn.run("designdrop.web_app.server:app", host=host, port=port, reload=reload)
    except Exception:
        logger.exception("Server stopped with an error")
        sys.exit(1)


if __name__ == "__main__":
    main()
