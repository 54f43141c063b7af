"""Button interactions"""

import logging

from playwright.sync_api import Error as PlaywrightError

logger = logging.getLogger(__name__)

MODAL_SELECTORS = [
    'div[role="dialog"]',
    ".jobs-easy-apply-modal",
    ".artdeco-modal",
    "div.jobs-easy-apply-modal__content",
    ".artdeco-modal__content",
]


def first_present(scope, selectors):
    """Return the first locator (scoped to `scope`) that matches, or None"""
    for selector in selectors:
        try:
            locator = scope.locator(selector)
            if locator.count() > 0:
                return locator.first
        except PlaywrightError as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
    return None


def click_first(scope, selectors, description="button"):
    """Click the first enabled match among selectors. Returns True if clicked."""
    for selector in selectors:
        try:
            locator = scope.locator(selector)
            if locator.count() == 0:
                continue
            btn = locator.first
            if btn.is_disabled():
                logger.warning(
                    f"⚠️ '{description}' found but DISABLED - required fields are usually unfilled"
                )
                return False
            btn.click()
            logger.debug(f"✓ Clicked {description} via {selector}")
            return True
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error clicking {description} via {selector}: {e}")
    return False


def wait_for_application_modal(page, timeout=30000):
    """Wait for the application modal to appear"""
    logger.info("Waiting for application modal...")

    for selector in MODAL_SELECTORS:
        try:
            page.wait_for_selector(selector, state="visible", timeout=timeout)
            logger.info(f"  ✓ Modal detected via: {selector}")
            return True
        except PlaywrightError:
            continue

    return False
