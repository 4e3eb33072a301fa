# ABOUTME: Spec discovery and pytest launcher for browser runs
# ABOUTME: Translates runner configuration into pytest and pytest-playwright arguments

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pytest

from .config import DEFAULT_CONFIG_PATH, RunnerConfig, get_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "QA_SANDBOX_CONFIG"


def discover_specs(config: RunnerConfig, root: Union[str, Path] = ".") -> List[Path]:
    """
    Find spec files matching the configured glob.

    Args:
        config: Runner configuration holding spec_pattern
        root: Directory the pattern is relative to

    Returns:
        Sorted list of matching files
    """
    return sorted(p for p in Path(root).glob(config.spec_pattern) if p.is_file())


def build_pytest_args(
    config: RunnerConfig,
    specs: Sequence[Path],
    extra_args: Optional[Sequence[str]] = None,
) -> List[str]:
    """Build the pytest command line for a browser run."""
    args = [str(spec) for spec in specs]
    args += [
        "--run-e2e",
        "--video",
        "on" if config.video else "off",
        "--screenshot",
        "only-on-failure" if config.screenshot_on_run_failure else "off",
        "--output",
        str(Path(config.reporter_options.report_dir) / "artifacts"),
    ]
    args += list(extra_args or [])
    return args


def run(
    config_path: Optional[str] = None,
    extra_args: Optional[Sequence[str]] = None,
    root: Union[str, Path] = ".",
) -> int:
    """
    Discover specs and run them with pytest.

    Returns:
        pytest exit code (5 when no spec matched the pattern)
    """
    config_path = config_path or os.environ.get(
        CONFIG_ENV_VAR, str(Path(root) / DEFAULT_CONFIG_PATH)
    )
    # Same anchoring as the harness, so artifacts and reports share one tree
    config = get_config(config_path).resolve_paths(root)
    logger.info(f"Base URL: {config.base_url}")

    specs = discover_specs(config, root)
    if not specs:
        logger.warning(f"No spec files match {config.spec_pattern!r} under {root}")
        return int(pytest.ExitCode.NO_TESTS_COLLECTED)

    logger.info(f"Running {len(specs)} spec file(s)")
    # The harness reads the same config file
    os.environ[CONFIG_ENV_VAR] = config_path
    return int(pytest.main(build_pytest_args(config, specs, extra_args)))
