"""Locate and validate ``dtutil.toml``.

The file is searched for from the working directory upwards, the way
git finds ``.git/``. ``DTUTIL_CONFIG`` (or ``--config``) names a file
directly and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

import click
from pydantic import ValidationError

from dtutil.config.models import DtConfig

CONFIG_FILENAME = "dtutil.toml"
CONFIG_ENV_VAR = "DTUTIL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``dtutil.toml`` governing *start* (default: cwd), if any.

    A ``DTUTIL_CONFIG`` that points at a missing file yields None rather
    than falling back to the search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> DtConfig:
    """Read and validate a config file into :class:`DtConfig`.

    With no *path* the file is discovered from *cwd*; no file at all
    gives the defaults. Sections and keys the file leaves out stay
    unset on the returned model, so callers can tell overrides from
    defaults with ``model_dump(exclude_unset=True)``.

    Raises:
        click.ClickException: If the file is not valid TOML or a value
            fails validation (e.g. an unknown ``[diff] unit``).
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return DtConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
    try:
        return DtConfig.model_validate(data)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid config in {path}: {exc}") from exc
