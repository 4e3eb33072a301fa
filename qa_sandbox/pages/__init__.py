# ABOUTME: Page Object Model classes for the QA automation sandbox
# ABOUTME: One class per page, wrapping locators, actions and verifications

from .home import HomePage, HomeSelectors, create_home_page

__all__ = ["HomePage", "HomeSelectors", "create_home_page"]
