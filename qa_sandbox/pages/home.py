# ABOUTME: Page object for the sandbox home page
# ABOUTME: Wraps hero, theme toggle and project card locators plus their actions

import logging
from typing import List, Optional

from playwright.sync_api import Locator, Page, expect

from ..checks import Check, VerificationResult, run_checks
from ..config import RunnerConfig
from ..fixtures import FixtureLoader

logger = logging.getLogger(__name__)


class HomeSelectors:
    """data-testid values for the home page. Edit here when the DOM changes."""

    hero_title = "hero-title"
    hero_subtitle = "hero-subtitle"
    theme_toggle = "theme-toggle"
    card_ecommerce = "card-ecommerce"
    start_shopping_link = "card-ecommerce-link"
    card_playground = "card-playground"
    start_playground_link = "card-playground-link"


class HomePage:
    """
    Page object for the sandbox landing page.

    Locator properties query the page on every access and never cache the
    resolved elements. An absent element is not an error until an action or
    assertion is applied to it, at which point Playwright's own wait policy
    decides the outcome.

    Usage:
        home = create_home_page(page, config)
        home.visit()
        home.verify_page_element()
        home.click_get_started()
    """

    path = "/"
    texts_fixture = "texts"

    def __init__(
        self,
        page: Page,
        fixtures: FixtureLoader,
        base_url: Optional[str] = None,
    ):
        self.page = page
        self.fixtures = fixtures
        self.base_url = base_url

    @property
    def url(self) -> str:
        """Address visited by visit(); relative when no base URL is set."""
        if self.base_url:
            return self.base_url.rstrip("/") + self.path
        return self.path

    # -------------------------------------------------------------------------
    # Locators
    # -------------------------------------------------------------------------

    @property
    def hero_title(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.hero_title)

    @property
    def hero_subtitle(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.hero_subtitle)

    @property
    def theme_toggle(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.theme_toggle)

    @property
    def card_ecommerce(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.card_ecommerce)

    @property
    def start_shopping_link(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.start_shopping_link)

    @property
    def card_playground(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.card_playground)

    @property
    def start_playground_link(self) -> Locator:
        return self.page.get_by_test_id(HomeSelectors.start_playground_link)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def visit(self) -> None:
        """Navigate to the home page. Navigation errors propagate unchanged."""
        logger.info(f"Visiting home page at {self.url}")
        self.page.goto(self.url)

    def click_get_started(self) -> None:
        logger.info("Clicking 'Start shopping' link")
        self.start_shopping_link.click()

    def click_get_started_playground(self) -> None:
        logger.info("Clicking 'Start playground' link")
        self.start_playground_link.click()

    def click_toggle_theme(self) -> None:
        logger.info("Toggling theme")
        self.theme_toggle.click()

    # -------------------------------------------------------------------------
    # Verifications
    # -------------------------------------------------------------------------

    def _check_subtitle_text(self) -> None:
        # Fixture is read at check time, not at construction
        texts = self.fixtures.load(self.texts_fixture)
        home_texts = texts.get("homePage") if isinstance(texts, dict) else None
        expected = home_texts.get("subtitle") if isinstance(home_texts, dict) else None
        if not isinstance(expected, str):
            raise AssertionError(
                f"fixture {self.texts_fixture!r} has no string at homePage.subtitle"
            )

        expect(self.hero_subtitle).to_have_text(expected)
        # to_have_text normalizes whitespace; the fixture must match exactly
        actual = self.hero_subtitle.text_content()
        if actual != expected:
            raise AssertionError(
                f"expected subtitle text {actual!r} to equal fixture value {expected!r}"
            )

    def page_checks(self) -> List[Check]:
        """Ordered named steps making up the home page verification."""
        return [
            ("hero title visible", lambda: expect(self.hero_title).to_be_visible()),
            (
                "hero subtitle visible",
                lambda: expect(self.hero_subtitle).to_be_visible(),
            ),
            ("hero subtitle text", self._check_subtitle_text),
            (
                "theme toggle visible",
                lambda: expect(self.theme_toggle).to_be_visible(),
            ),
            (
                "ecommerce card visible",
                lambda: expect(self.card_ecommerce).to_be_visible(),
            ),
            (
                "start shopping link visible",
                lambda: expect(self.start_shopping_link).to_be_visible(),
            ),
            (
                "playground card visible",
                lambda: expect(self.card_playground).to_be_visible(),
            ),
            (
                "start playground link visible",
                lambda: expect(self.start_playground_link).to_be_visible(),
            ),
        ]

    def run_page_checks(self) -> VerificationResult:
        """Run every home page check and return the aggregated result."""
        return run_checks(self.page_checks())

    def verify_page_element(self) -> VerificationResult:
        """
        Verify the home page renders its hero, theme toggle and project cards.

        Returns:
            VerificationResult of the passing run

        Raises:
            PageVerificationError: At the first failing check; later checks are skipped
        """
        result = self.run_page_checks()
        logger.info(
            f"Home page verification: {result.passed_count}/{len(result.checks)} checks passed"
        )
        return result.raise_for_failure()


def create_home_page(page: Page, config: RunnerConfig) -> HomePage:
    """Build a HomePage bound to one Playwright page and the runner config."""
    return HomePage(
        page,
        FixtureLoader(config.fixtures_folder),
        base_url=config.base_url,
    )
