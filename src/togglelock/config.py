"""
Configuration loading.

Settings live in a YAML file with three sections (box, solver, logging).
Values missing from the file fall back to DEFAULTS; command line flags
override both.
"""
from __future__ import annotations

import copy
import logging
from pathlib import Path

import yaml

from .solvers import METHODS

DEFAULTS: dict = {
    "box": {"seed": None, "max_shuffle": 1000},
    "solver": {"method": "cells", "min_weight": True, "max_nullspace_dim": 10},
    "logging": {"level": "WARNING", "file": None},
}

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a configuration file is malformed."""

    pass


def _merge(base: dict, override: dict, where: str) -> dict:
    merged = copy.deepcopy(base)
    for section, values in override.items():
        if section not in base:
            raise ConfigError(f"{where}: unknown section '{section}'")
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ConfigError(f"{where}: section '{section}' must be a mapping")
        for key, value in values.items():
            if key not in base[section]:
                raise ConfigError(f"{where}: unknown key '{section}.{key}'")
            merged[section][key] = value
    return merged


def validate_config(cfg: dict, where: str = "config") -> dict:
    seed = cfg["box"]["seed"]
    if seed is not None and (
        isinstance(seed, bool) or not isinstance(seed, int) or seed < 0
    ):
        raise ConfigError(f"{where}: box.seed must be a non-negative integer or null")
    max_shuffle = cfg["box"]["max_shuffle"]
    if isinstance(max_shuffle, bool) or not isinstance(max_shuffle, int) or max_shuffle < 0:
        raise ConfigError(f"{where}: box.max_shuffle must be a non-negative integer")

    if cfg["solver"]["method"] not in METHODS:
        raise ConfigError(
            f"{where}: solver.method must be one of {', '.join(METHODS)}"
        )
    if not isinstance(cfg["solver"]["min_weight"], bool):
        raise ConfigError(f"{where}: solver.min_weight must be true or false")
    dim = cfg["solver"]["max_nullspace_dim"]
    if isinstance(dim, bool) or not isinstance(dim, int) or dim < 0:
        raise ConfigError(
            f"{where}: solver.max_nullspace_dim must be a non-negative integer"
        )

    level = str(cfg["logging"]["level"]).upper()
    if level not in _LEVELS:
        raise ConfigError(f"{where}: logging.level must be one of {', '.join(_LEVELS)}")
    cfg["logging"]["level"] = level
    return cfg


def load_config(path: str | Path | None = None) -> dict:
    """Return the merged configuration, reading `path` if given."""
    if path is None:
        return validate_config(copy.deepcopy(DEFAULTS), "defaults")

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    cfg = validate_config(_merge(DEFAULTS, raw, str(path)), str(path))
    logging.getLogger(__name__).debug("Loaded config from %s", path)
    return cfg
