"""YAML configuration loading for calculator defaults and pipeline policies."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from reliacalc.alignment.loss_model import OperatingParameters
from reliacalc.config.policies import AlertPolicy, PipelinePolicy

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CalculatorConfig:
    """Resolved configuration; every section falls back to its defaults."""

    pipeline: PipelinePolicy = field(default_factory=PipelinePolicy)
    alerts: AlertPolicy = field(default_factory=AlertPolicy)
    operating: OperatingParameters = field(default_factory=OperatingParameters)


_SECTIONS: dict[str, type] = {
    "pipeline": PipelinePolicy,
    "alerts": AlertPolicy,
    "operating": OperatingParameters,
}


def load_calculator_config(path: str | Path) -> CalculatorConfig:
    """Read a YAML file into a `CalculatorConfig`."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle)

    LOGGER.info("Loaded calculator config from %s", config_path)
    return parse_calculator_config({} if raw is None else raw)


def parse_calculator_config(raw: Mapping[str, Any]) -> CalculatorConfig:
    """Build a `CalculatorConfig` from an already-parsed mapping."""
    if not isinstance(raw, Mapping):
        raise ValueError("config root must be a mapping")

    unknown_sections = set(raw) - set(_SECTIONS)
    if unknown_sections:
        raise ValueError(f"unknown config sections: {', '.join(sorted(unknown_sections))}")

    sections: dict[str, Any] = {}
    for name, section_type in _SECTIONS.items():
        values = raw.get(name) or {}
        if not isinstance(values, Mapping):
            raise ValueError(f"config section {name} must be a mapping")
        sections[name] = _build_section(name, section_type, values)

    operating: OperatingParameters = sections["operating"]
    for item in fields(OperatingParameters):
        value = getattr(operating, item.name)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"operating.{item.name} must be a finite value >= 0")

    return CalculatorConfig(**sections)


def _build_section(name: str, section_type: type, values: Mapping[str, Any]) -> Any:
    allowed = {item.name: item.type for item in fields(section_type)}
    unknown = set(values) - set(allowed)
    if unknown:
        raise ValueError(f"unknown keys in config section {name}: {', '.join(sorted(unknown))}")

    kwargs: dict[str, Any] = {}
    for key, value in values.items():
        kwargs[key] = _coerce_value(f"{name}.{key}", allowed[key], value)
    return section_type(**kwargs)


def _coerce_value(key: str, kind: Any, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {value!r}") from exc
    if kind == "int":
        if not number.is_integer():
            raise ValueError(f"{key} must be an integer, got {value!r}")
        return int(number)
    return number
