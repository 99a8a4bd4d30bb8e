"""Pool definition files.

A definition is a TOML document with the top-level pool fields and
``[sku]``, ``[per_database_settings]`` and ``[tags]`` tables. Loading
parses and schema-checks it into a :class:`PoolConfig`; business rules
are checked later by :mod:`poolctl.domain.rules`.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import ValidationError

from poolctl.domain.pool import PoolConfig


class DefinitionError(Exception):
    """A definition file could not be read or failed schema checks."""

    def __init__(self, path: Path, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _format_errors(exc: ValidationError) -> list[str]:
    lines: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"{loc}: {err['msg']}")
    return lines


def load_definition(path: Path) -> PoolConfig:
    """Read and schema-check the pool definition at *path*.

    Raises:
        DefinitionError: the file is missing, not TOML, or not a valid pool.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read pool definition {path}: {exc}"
        raise DefinitionError(path, msg) from exc

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise DefinitionError(path, msg) from exc

    try:
        return PoolConfig.model_validate(data)
    except ValidationError as exc:
        errors = _format_errors(exc)
        msg = f"Invalid pool definition {path}: {'; '.join(errors)}"
        raise DefinitionError(path, msg, errors) from exc
