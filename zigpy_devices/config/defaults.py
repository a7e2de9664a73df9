"""Default values for configuration."""

from __future__ import annotations

CONF_EXCLUDED_MODELS_DEFAULT: list[str] = []
CONF_INVERT_COVER_DEFAULT = False
CONF_TRANSITION_DEFAULT = 0
