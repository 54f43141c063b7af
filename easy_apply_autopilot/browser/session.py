"""Browser session management"""

import logging

from playwright.sync_api import sync_playwright

from easy_apply_autopilot import config

logger = logging.getLogger(__name__)


def launch_browser(user_data_dir=config.BROWSER_DATA_DIR, headless=False):
    """
    Launch persistent browser context and return (playwright, context, page).
    Reuses login session across runs.
    """
    logger.info("Launching browser...")

    p = sync_playwright().start()

    context = p.chromium.launch_persistent_context(
        user_data_dir=user_data_dir,
        headless=headless,
        args=[
            "--disable-blink-features=AutomationControlled",
            "--disable-features=site-per-process",
        ],
        user_agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    )

    page = context.pages[0] if context.pages else context.new_page()

    return p, context, page
