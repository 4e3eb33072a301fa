# ABOUTME: Runner configuration loader module
# ABOUTME: Loads browser runner and reporter settings from YAML with sensible defaults

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "sandbox.yaml"


@dataclass(frozen=True)
class ReporterOptions:
    """Options controlling which report artifacts are written and where."""

    report_dir: str = "reports"
    report_filename: str = "report"
    overwrite: bool = False
    html: bool = True
    json: bool = True
    timestamp: str = "mmddyyyy_HHMMss"


@dataclass(frozen=True)
class RunnerConfig:
    """Configuration data class with default values."""

    base_url: str = "https://qa-automation-sandbox.vercel.app/"
    viewport_width: int = 1920
    viewport_height: int = 1080
    spec_pattern: str = "tests/e2e/specs/**/test_*.py"
    fixtures_folder: str = "tests/fixtures"
    video: bool = False
    screenshot_on_run_failure: bool = True
    reporter: str = "sandbox-report"
    reporter_options: ReporterOptions = field(default_factory=ReporterOptions)

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def resolve_paths(self, root: Union[str, Path]) -> "RunnerConfig":
        """Return a copy whose relative folders are anchored at root."""
        root = Path(root)
        return replace(
            self,
            fixtures_folder=str(root / self.fixtures_folder),
            reporter_options=replace(
                self.reporter_options,
                report_dir=str(root / self.reporter_options.report_dir),
            ),
        )


def _pick(data: dict, key: str, expected_type: type, default: Any) -> Any:
    """Return data[key] if it has the expected type, otherwise the default."""
    if key not in data:
        return default

    value = data[key]
    # bool is a subclass of int, so reject it explicitly for numeric keys
    if expected_type is int and isinstance(value, bool):
        valid = False
    else:
        valid = isinstance(value, expected_type)

    if not valid:
        logger.warning(
            f"Ignoring config key {key!r}: expected {expected_type.__name__}, got {type(value).__name__}"
        )
        return default
    return value


def _reporter_options(data: Any) -> ReporterOptions:
    options = ReporterOptions()
    if not isinstance(data, dict):
        return options

    return replace(
        options,
        report_dir=_pick(data, "report_dir", str, options.report_dir),
        report_filename=_pick(data, "report_filename", str, options.report_filename),
        overwrite=_pick(data, "overwrite", bool, options.overwrite),
        html=_pick(data, "html", bool, options.html),
        json=_pick(data, "json", bool, options.json),
        timestamp=_pick(data, "timestamp", str, options.timestamp),
    )


def get_config(config_path: str = DEFAULT_CONFIG_PATH) -> RunnerConfig:
    """
    Load runner configuration from YAML file with defaults for missing keys.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        RunnerConfig object with loaded or default values
    """
    config = RunnerConfig()

    try:
        with open(config_path, "r") as f:
            yaml_data = yaml.safe_load(f) or {}
    except (FileNotFoundError, yaml.YAMLError):
        # Use all defaults if file missing or invalid
        return config

    if not isinstance(yaml_data, dict):
        logger.warning(f"Config file {config_path} is not a mapping, using defaults")
        return config

    return replace(
        config,
        base_url=_pick(yaml_data, "base_url", str, config.base_url),
        viewport_width=_pick(yaml_data, "viewport_width", int, config.viewport_width),
        viewport_height=_pick(
            yaml_data, "viewport_height", int, config.viewport_height
        ),
        spec_pattern=_pick(yaml_data, "spec_pattern", str, config.spec_pattern),
        fixtures_folder=_pick(
            yaml_data, "fixtures_folder", str, config.fixtures_folder
        ),
        video=_pick(yaml_data, "video", bool, config.video),
        screenshot_on_run_failure=_pick(
            yaml_data,
            "screenshot_on_run_failure",
            bool,
            config.screenshot_on_run_failure,
        ),
        reporter=_pick(yaml_data, "reporter", str, config.reporter),
        reporter_options=_reporter_options(yaml_data.get("reporter_options")),
    )
