from __future__ import annotations

import logging

from ats_engine.core.config import Settings, settings as default_settings


def configure_logging(settings: Settings | None = None) -> None:
    active = settings or default_settings
    logging.basicConfig(level=active.log_level.upper(), format="%(message)s")
