"""
bankscraper.bankconfig
=================================

Configuration dataclasses and helpers used to coerce a JSON configuration
into Python objects consumed by the scraper runtime.

The primary public surface is :class:`Config`, which mirrors the JSON
structure users author. :func:`load_config` reads a JSON file and returns a
validated :class:`Config` instance.
"""

import json
import logging
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from types import UnionType
from typing import Any, Literal, Union, get_args, get_origin, get_type_hints

from .bankerrors import ConfigError

BROWSERS = ("chromium", "firefox", "webkit")
WAIT_UNTIL = ("commit", "domcontentloaded", "load", "networkidle")


@dataclass
class NavigationConfig:
    """
    How the target page is opened.

    ``wait_until`` is handed to Playwright's ``page.goto``; ``timeout_ms``
    bounds that navigation only. The extraction loop itself has no timeout.
    """

    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"] = "load"
    timeout_ms: int = 30000


@dataclass
class OutputConfig:
    """Where extracted transactions are written. Unset paths are skipped."""

    json_path: Path | None = None
    csv_path: Path | None = None
    indent: int = 2


@dataclass
class Config:
    """
    Top-level runtime configuration.

    This dataclass mirrors the keys accepted by the JSON configuration
    files. Users typically author JSON objects that are read with
    :func:`load_config`; the CLI may override individual fields.
    """

    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    base_url: str = ""
    log_level: str = "INFO"

    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _unwrap_optional(t: Any) -> Any:
    """Return the inner type if ``t`` is ``X | None`` else ``t``."""
    if get_origin(t) in (Union, UnionType):
        non_none = [a for a in get_args(t) if a is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
    return t


def coerce_value(val: Any, target_type: Any) -> Any:
    if val is None:
        return None
    inner_type = _unwrap_optional(target_type)

    if is_dataclass(inner_type) and isinstance(val, dict):
        return coerce_nested(val, inner_type)
    if inner_type is Path and isinstance(val, str):
        return Path(val)
    return val


def coerce_nested(obj: dict, cls: type[Any]) -> Any:
    """
    Build ``cls`` from ``obj``, coercing nested dataclasses and paths.

    Keys without a matching field are ignored; missing keys keep their
    defaults.
    """
    hints = get_type_hints(cls)
    kwargs = {
        f.name: coerce_value(obj[f.name], hints[f.name])
        for f in fields(cls)
        if f.name in obj
    }
    return cls(**kwargs)


def _require(name: str, val: Any, typ: type | tuple[type, ...]) -> None:
    # bool is an int subclass; JSON true must not pass for a number.
    if not isinstance(val, typ) or (isinstance(val, bool) and typ is not bool):
        msg = f"{name} has invalid type {type(val).__name__}: {val!r}"
        raise ConfigError(msg)


def validate_config(cfg: Config) -> Config:
    """
    Check value types and choices; normalise ``log_level`` to upper case.

    Raises :class:`ConfigError` on the first invalid field.
    """
    _require("navigation", cfg.navigation, NavigationConfig)
    _require("output", cfg.output, OutputConfig)
    _require("browser", cfg.browser, str)
    _require("headless", cfg.headless, bool)
    _require("base_url", cfg.base_url, str)
    _require("log_level", cfg.log_level, str)
    _require("navigation.wait_until", cfg.navigation.wait_until, str)
    _require("navigation.timeout_ms", cfg.navigation.timeout_ms, int)
    _require("output.json_path", cfg.output.json_path, (Path, type(None)))
    _require("output.csv_path", cfg.output.csv_path, (Path, type(None)))
    _require("output.indent", cfg.output.indent, int)

    if cfg.log_level.upper() not in logging.getLevelNamesMapping():
        msg = f"Unknown log_level: {cfg.log_level!r}"
        raise ConfigError(msg)
    cfg.log_level = cfg.log_level.upper()
    if cfg.browser not in BROWSERS:
        msg = f"Unsupported browser: {cfg.browser!r} (expected one of {BROWSERS})"
        raise ConfigError(msg)
    if cfg.navigation.wait_until not in WAIT_UNTIL:
        msg = f"Unsupported wait_until: {cfg.navigation.wait_until!r}"
        raise ConfigError(msg)
    if cfg.navigation.timeout_ms < 0:
        msg = f"navigation.timeout_ms must be >= 0, got {cfg.navigation.timeout_ms}"
        raise ConfigError(msg)
    return cfg


def load_config(path: str | Path) -> Config:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ConfigError(msg) from e
    if not isinstance(raw, dict):
        msg = f"Configuration root must be an object, got {type(raw).__name__}"
        raise ConfigError(msg)
    return validate_config(coerce_nested(raw, Config))
