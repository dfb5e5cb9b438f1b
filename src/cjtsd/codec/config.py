"""
Configuration for the cjtsd.codec module.

Defines CodecSettings, a frozen dataclass carrying runtime defaults for builders and
decoders. Defaults come from cjtsd.core.units (the single source of truth for the
default unit).

Import DAG discipline
- Depends only on stdlib and cjtsd.core.
- Never changes wire semantics: settings only pick defaults (unit of new builders,
  time zone of decoded datetimes).

Notes
- Precedence: environment > TOML > defaults.
- Invalid values are ignored and the lower-precedence value is kept.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from cjtsd.core.errors import UnsupportedUnitError
from cjtsd.core.units import DEFAULT_UNIT, Unit, normalize_unit

logger = logging.getLogger(__name__)

TimeZone = Literal["utc", "local"]


@dataclass(frozen=True)
class CodecSettings:
    """
    Runtime settings for the cjtsd.codec layer.

    Attributes:
        unit (Unit): Unit used by builders created without an explicit unit.
        timezone (Literal["utc","local"]): Zone of datetimes produced by ``expand``.
            "utc" yields UTC-aware datetimes; "local" converts them to the host zone.

    Examples:
        >>> from cjtsd.codec.config import CodecSettings
        >>> from cjtsd.core.units import Unit
        >>> CodecSettings(unit=Unit.SECONDS).unit
        <Unit.SECONDS: 's'>
    """

    unit: Unit = DEFAULT_UNIT
    timezone: TimeZone = "utc"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: CodecSettings, cfg: dict[str, Any] | None) -> CodecSettings:
        """Apply a loose config mapping onto CodecSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "unit" in cfg:
            try:
                s = replace(s, unit=normalize_unit(cfg["unit"]))
            except UnsupportedUnitError:
                logger.warning("Ignoring unsupported unit in config: %r", cfg["unit"])

        if "timezone" in cfg and isinstance(cfg["timezone"], str):
            tz = cfg["timezone"].strip().lower()
            if tz in ("utc", "local"):
                s = replace(s, timezone=tz)  # type: ignore[arg-type]
            else:
                logger.warning("Ignoring unsupported timezone in config: %r", cfg["timezone"])

        return s

    @classmethod
    def from_env(cls, base: CodecSettings | None = None, prefix: str = "CJTSD_") -> CodecSettings:
        """
        Build CodecSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - CJTSD_UNIT ("m"/"s"/"S" or "minutes"/"seconds"/"millis")
            - CJTSD_TIMEZONE ("utc" | "local")
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        v = os.getenv(prefix + "UNIT")
        if v:
            mapping["unit"] = v
        v = os.getenv(prefix + "TIMEZONE")
        if v:
            mapping["timezone"] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Build CodecSettings from a TOML file.

        Search order when `path` is None:
            1) ./cjtsd.toml (with either a [codec] table or top-level keys)
            2) ./pyproject.toml under [tool.cjtsd]

        Returns defaults if no file is present or it cannot be parsed.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("Could not read %s: %s", p, exc)
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "cjtsd.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("cjtsd") if isinstance(tool, dict) else None
            elif isinstance(data.get("codec"), dict):
                cfg = data["codec"]
            else:
                cfg = data
            if cfg:
                logger.debug("Loaded codec settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> CodecSettings:
        """
        Load CodecSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (cjtsd.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
