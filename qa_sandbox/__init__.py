# ABOUTME: End-to-end test harness for the QA automation sandbox site
# ABOUTME: Exposes runner configuration, fixture loading and page models

from .config import RunnerConfig, ReporterOptions, get_config
from .fixtures import FixtureLoader, FixtureNotFoundError
from .pages import HomePage, create_home_page

__all__ = [
    "RunnerConfig",
    "ReporterOptions",
    "get_config",
    "FixtureLoader",
    "FixtureNotFoundError",
    "HomePage",
    "create_home_page",
]
