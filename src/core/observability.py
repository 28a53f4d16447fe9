"""
Observability setup for genelib.

Configures Logfire export from the process settings. Library code only emits
spans and events; applications call configure_observability() once at
startup to decide where they go.
"""

import logging
from typing import Optional

import logfire

from src.core.config import Settings, settings as default_settings


def configure_observability(settings: Optional[Settings] = None) -> None:
    """
    Configure Logfire and the genelib log level.

    Data is only sent to Logfire when a token is present, so a development
    setup without credentials runs without export.

    Args:
        settings: Process settings, defaults to the global instance
    """
    settings = settings or default_settings

    logfire.configure(
        send_to_logfire="if-token-present",
        **settings.get_logfire_settings()
    )
    logging.getLogger("genelib").setLevel(getattr(logging, settings.log_level))

    logfire.info(
        "Observability configured",
        service=settings.logfire_service_name,
        environment=settings.logfire_environment
    )
