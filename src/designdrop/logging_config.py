from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml


FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def load_logging_config(path: str | Path | None = None) -> Dict[str, Any]:
    """Прочитать секцию ``logging`` из YAML-файла.

    Путь берётся из аргумента или переменной ``DESIGNDROP_CONFIG``.
    Отсутствующий файл означает пустую конфигурацию.
    """
    config_path = path or os.environ.get("DESIGNDROP_CONFIG")
    if not config_path:
        return {}
    try:
        with open(Path(config_path), encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        return {}
    section = data.get("logging", {}) if isinstance(data, dict) else {}
    return section if isinstance(section, dict) else {}


def setup_logging(level: str, log_file: Path | str | None) -> None:
    """Configure logging for console and optional file output.

    Parameters
    ----------
    level:
        Log level name (e.g., "INFO", "DEBUG").
    log_file:
        If provided, logs are also written to this file.

    Values from the YAML file named by ``DESIGNDROP_CONFIG`` take priority.
    """
    overrides = load_logging_config()
    level = str(overrides.get("level", level))
    log_file = overrides.get("file", log_file)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=overrides.get("format", FORMAT),
        handlers=handlers,
        force=True,
    )


__all__ = ["setup_logging", "load_logging_config", "FORMAT"]
