"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dtutil.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dtutil.domain.patterns import DEFAULT_LOCALE
from dtutil.domain.types import TimeUnit
from dtutil.domain.utilities import DEFAULT_PATTERN

# --- dtutil.toml sections ---


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    locale: str = DEFAULT_LOCALE
    pattern: str = DEFAULT_PATTERN


class DiffConfig(BaseModel):
    """[diff] section."""

    model_config = {"frozen": True}

    unit: TimeUnit = TimeUnit.HOURS


class DtConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    format: FormatConfig = Field(default_factory=FormatConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
