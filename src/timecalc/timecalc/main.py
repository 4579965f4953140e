from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .common.validators import require_choice, require_positive
from .container import Container, build_container
from .core.constants import DEFAULT_BATCH_MAX_WORKERS
from .core.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_settings(settings_module: str) -> dict:
    settings = importlib.import_module(settings_module)
    try:
        return {
            "LOG_LEVEL": require_choice(str(getattr(settings, "LOG_LEVEL", "INFO")), "LOG_LEVEL", _LOG_LEVELS),
            "BATCH_MAX_WORKERS": require_positive(int(getattr(settings, "BATCH_MAX_WORKERS", DEFAULT_BATCH_MAX_WORKERS)), "BATCH_MAX_WORKERS"),
            "ROUND_RELATIVE_TO_PLAN": bool(getattr(settings, "ROUND_RELATIVE_TO_PLAN", False)),
            "DEBUG": bool(getattr(settings, "DEBUG", False)),
        }
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"{settings_module}: {e}") from e


def create_engine() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = load_settings(settings_module)
    logging.basicConfig(level=settings["LOG_LEVEL"])

    if settings["DEBUG"]:
        logger.debug(
            "settings=%s workers=%s round_relative_to_plan=%s",
            settings_module,
            settings["BATCH_MAX_WORKERS"],
            settings["ROUND_RELATIVE_TO_PLAN"],
        )

    return build_container(settings=settings)
