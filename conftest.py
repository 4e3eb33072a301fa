# ABOUTME: pytest harness for the sandbox browser specs
# ABOUTME: Wires runner config into pytest-playwright and provides page object fixtures

import os
from dataclasses import replace
from pathlib import Path

import pytest
from playwright.sync_api import Page

from qa_sandbox.config import DEFAULT_CONFIG_PATH, RunnerConfig, get_config
from qa_sandbox.pages import HomePage, create_home_page
from qa_sandbox.reporter import create_reporter
from qa_sandbox.runner import CONFIG_ENV_VAR

ROOT = Path(__file__).parent


def _load_runner_config() -> RunnerConfig:
    config_path = os.environ.get(CONFIG_ENV_VAR, str(ROOT / DEFAULT_CONFIG_PATH))
    return get_config(config_path).resolve_paths(ROOT)


def pytest_addoption(parser):
    group = parser.getgroup("qa-sandbox")
    group.addoption(
        "--run-browser",
        action="store_true",
        default=False,
        help="run offline browser tests against the routed local page",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="run specs against the live base URL and write run reports",
    )


def pytest_configure(config):
    """Configure pytest for Playwright tests."""
    config.addinivalue_line("markers", "browser: mark test as browser-based E2E test")
    config.addinivalue_line("markers", "e2e: mark test as a spec against the live site")

    # Reports describe spec runs, not unit test runs
    if config.getoption("run_e2e") and not hasattr(config, "workerinput"):
        reporter = create_reporter(_load_runner_config())
        if reporter is not None:
            config.pluginmanager.register(reporter, "qa-sandbox-reporter")


def pytest_collection_modifyitems(config, items):
    gates = {
        "browser": ("run_browser", "needs --run-browser and installed browsers"),
        "e2e": ("run_e2e", "needs --run-e2e and network access"),
    }
    for item in items:
        for marker, (option, reason) in gates.items():
            if marker in item.keywords and not config.getoption(option):
                item.add_marker(pytest.mark.skip(reason=reason))


@pytest.fixture(scope="session")
def runner_config() -> RunnerConfig:
    return _load_runner_config()


@pytest.fixture(scope="session")
def base_url(pytestconfig, runner_config: RunnerConfig) -> str:
    """Base URL from --base-url, falling back to the runner config."""
    return pytestconfig.getoption("base_url", None) or runner_config.base_url


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, runner_config: RunnerConfig):
    """Configure browser context with the configured viewport."""
    return {
        **browser_context_args,
        "viewport": runner_config.viewport,
    }


@pytest.fixture
def home_page(page: Page, runner_config: RunnerConfig, base_url: str) -> HomePage:
    """Home page object bound to this test's page.

    Usage:
        def test_something(home_page):
            home_page.visit()
            home_page.verify_page_element()
    """
    return create_home_page(page, replace(runner_config, base_url=base_url))
