"""HealthPulse — Модуль конфігурації"""
from .settings import (
    HealthPulseConfig,
    get_default_config,
    ModelBuilderConfig,
    InferenceConfig,
    DataConfig,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "HealthPulseConfig",
    "get_default_config",
    "ModelBuilderConfig",
    "InferenceConfig",
    "DataConfig",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
