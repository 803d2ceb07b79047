"""Policies and YAML configuration loading."""

from reliacalc.config.loader import CalculatorConfig, load_calculator_config, parse_calculator_config
from reliacalc.config.policies import AlertPolicy, PipelinePolicy

__all__ = [
    "AlertPolicy",
    "CalculatorConfig",
    "PipelinePolicy",
    "load_calculator_config",
    "parse_calculator_config",
]
