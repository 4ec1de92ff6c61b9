"""Configuration module for the transliteration E2E suite."""
from config.models import (
    BrowserConfig,
    DataConfig,
    ReportingConfig,
    SuiteConfig,
    TargetConfig,
    load_config,
)

__all__ = [
    "BrowserConfig",
    "DataConfig",
    "ReportingConfig",
    "SuiteConfig",
    "TargetConfig",
    "load_config",
]
