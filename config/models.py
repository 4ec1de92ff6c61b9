"""Pydantic configuration models for the transliteration E2E suite."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from exceptions import ConfigFileNotFoundError


# Load .env file if present
load_dotenv()


def _env_defaults(data: Any, env_mapping: dict[str, str]) -> Any:
    """Fill fields that were not explicitly set from environment variables."""
    if not isinstance(data, dict):
        return data
    for field_name, env_var in env_mapping.items():
        if field_name not in data or data[field_name] is None:
            env_value = os.getenv(env_var)
            if env_value:
                data[field_name] = env_value
    return data


class TargetConfig(BaseModel):
    """Application under test and the waits used against it."""

    base_url: str = Field(
        default="http://localhost:3000",
        description="Root URL of the transliteration page",
    )
    navigation_timeout_ms: int = Field(
        default=30000,
        ge=1000,
        le=300000,
        description="Upper bound for page navigation",
    )
    hydration_delay_ms: int = Field(
        default=2000,
        ge=0,
        le=60000,
        description="Extra wait after network idle for client-side hydration",
    )
    settle_delay_ms: int = Field(
        default=1500,
        ge=0,
        le=60000,
        description="Wait after filling the input before reading the output",
    )
    clear_settle_ms: int = Field(
        default=500,
        ge=0,
        le=60000,
        description="Wait after clearing the input before reading the output",
    )
    input_timeout_ms: int = Field(
        default=15000,
        ge=0,
        le=120000,
        description="Visibility timeout for the input field",
    )
    output_timeout_ms: int = Field(
        default=5000,
        ge=0,
        le=120000,
        description="Visibility timeout for the output field",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url doesn't have trailing slash."""
        return v.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, data: Any) -> Any:
        """Load values from environment variables if not explicitly set."""
        return _env_defaults(data, {"base_url": "TRANSLIT_BASE_URL"})


class BrowserConfig(BaseModel):
    """Browser automation configuration."""

    browser: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to use",
    )
    headless: bool = Field(
        default=True,
        description="Run browser in headless mode",
    )
    viewport_width: int = Field(
        default=1280,
        ge=800,
        le=3840,
        description="Browser viewport width",
    )
    viewport_height: int = Field(
        default=720,
        ge=600,
        le=2160,
        description="Browser viewport height",
    )
    slow_mo: int = Field(
        default=0,
        ge=0,
        le=5000,
        description="Slow down browser operations by this many ms",
    )


class DataConfig(BaseModel):
    """Locations of the test data files."""

    fixture_path: Path = Field(
        default=Path("tests/data/test-data.xlsx"),
        description="Spreadsheet holding the transliteration cases",
    )
    catalog_path: Path = Field(
        default=Path("tests/data/test-data.json"),
        description="Canonical case list used by the result reporter",
    )

    @field_validator("fixture_path", "catalog_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, data: Any) -> Any:
        """Load values from environment variables if not explicitly set."""
        return _env_defaults(
            data,
            {"fixture_path": "TRANSLIT_FIXTURE", "catalog_path": "TRANSLIT_CATALOG"},
        )


class ReportingConfig(BaseModel):
    """Reporting and output configuration."""

    reports_folder: Path = Field(
        default=Path("./reports"),
        description="Directory for JUnit and other run reports",
    )
    ledger_path: Path = Field(
        default=Path("test-results/.last-run.json"),
        description="Machine-readable pass/fail ledger of the last run",
    )
    results_path: Path = Field(
        default=Path("results.xlsx"),
        description="Spreadsheet written by the result reporter",
    )
    output_format: Literal["json", "junit", "all"] = Field(
        default="json",
        description="Report output format besides the ledger",
    )

    @field_validator("reports_folder", "ledger_path", "results_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v


class SuiteConfig(BaseModel):
    """Root configuration model combining all config sections."""

    target: TargetConfig = Field(default_factory=TargetConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    # Execution settings
    parallel_workers: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Number of scenarios run concurrently",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging",
    )


def load_config(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[dict[str, Any]] = None,
) -> SuiteConfig:
    """
    Load configuration from file with CLI overrides.

    Priority (highest to lowest):
    1. CLI arguments
    2. Environment variables
    3. Config file
    4. Defaults

    An explicitly given ``config_path`` must exist; the implicit
    ``config.json`` is optional.
    """
    config_data: dict[str, Any] = {}

    if config_path is None:
        config_path = Path("config.json")
    elif not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix in {".yaml", ".yml"}:
                config_data = yaml.safe_load(f) or {}
            else:
                config_data = json.load(f)

    config = SuiteConfig.model_validate(config_data)

    if cli_overrides:
        config_dict = config.model_dump()
        _apply_overrides(config_dict, cli_overrides)
        config = SuiteConfig.model_validate(config_dict)

    return config


def _apply_overrides(config_dict: dict[str, Any], overrides: dict[str, Any]) -> None:
    """Apply CLI overrides to config dictionary."""
    override_mapping = {
        "base_url": ("target", "base_url"),
        "browser": ("browser", "browser"),
        "headful": ("browser", "headless"),  # inverted
        "parallel": ("parallel_workers", None),
        "verbose": ("verbose", None),
        "fixture": ("data", "fixture_path"),
        "catalog": ("data", "catalog_path"),
        "reports_dir": ("reporting", "reports_folder"),
        "ledger": ("reporting", "ledger_path"),
        "output": ("reporting", "results_path"),
        "output_format": ("reporting", "output_format"),
    }

    for key, value in overrides.items():
        if value is None:
            continue

        if key == "headful":
            config_dict["browser"]["headless"] = not value
            continue

        mapping = override_mapping.get(key)
        if mapping:
            section, field = mapping
            if field is None:
                config_dict[section] = value
            else:
                config_dict[section][field] = value
