"""
Site configuration record.

Combines the static literals in ``portfolio.constants.site`` with the
environment-overridable values from ``portfolio.config.Settings``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from portfolio.config import Settings
from portfolio.constants.site import SITE
from portfolio.exceptions import ConfigurationError
from portfolio.schemas.site import SiteConfig

logger = logging.getLogger(__name__)


def build_site_config(app_settings: Settings, literals: dict[str, Any] | None = None) -> SiteConfig:
    """
    Build a SiteConfig from static literals and process settings.

    Args:
        app_settings: Settings carrying the environment overrides
        literals: Site literals (defaults to ``SITE``)

    Raises:
        ConfigurationError: if the literals do not validate
    """
    data = dict(literals if literals is not None else SITE)
    data.update(
        {
            "disqus_script": app_settings.disqus_script,
            "contact_form_url": app_settings.contact_form_endpoint,
            "google_analytic_tracking_id": app_settings.ga_tracking_id,
        }
    )
    try:
        config = SiteConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid site configuration: {exc.error_count()} error(s)") from exc

    logger.debug("Site config built (%d tags, %d social links)", len(config.tags), len(config.social.root))
    return config

