"""
bankscraper.banksession.

Playwright-backed browser session and the :class:`PageDriver`
implementation the extraction loop runs against.

Helpers
-------
- PlaywrightDriver(page): driver capability over a Playwright async Page.
- open_page(cfg): async context manager launching a browser, navigating to
    ``cfg.base_url`` and yielding a ready :class:`PlaywrightDriver`.
"""

import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any

from playwright.async_api import Dialog, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from .bankconfig import Config
from .bankerrors import ExecutionError
from .bankscraper import PageDriver

logger = logging.getLogger(__name__)


class PlaywrightDriver(PageDriver):
    """
    :class:`PageDriver` over a Playwright ``Page``.

    Playwright auto-dismisses dialogs unless a listener is attached, so the
    driver attaches one on construction and holds the dialog until
    :meth:`dismiss_alert_if_present` accepts it. Dialogs opened after that
    first dismissal are accepted as they arrive; an open dialog would
    otherwise block every later ``evaluate``.
    """

    def __init__(self, page: Page) -> None:
        self.page = page
        self._pending: list[Dialog] = []
        self._auto_accept = False
        page.on("dialog", self._on_dialog)

    async def _on_dialog(self, dialog: Dialog) -> None:
        logger.debug("PlaywrightDriver: %s dialog opened: %r", dialog.type, dialog.message)
        if self._auto_accept:
            with contextlib.suppress(PlaywrightError):
                await dialog.accept()
            return
        self._pending.append(dialog)

    async def dismiss_alert_if_present(self) -> bool:
        self._auto_accept = True
        dismissed = False
        while self._pending:
            dialog = self._pending.pop(0)
            # The page may have closed the dialog already.
            with contextlib.suppress(PlaywrightError):
                await dialog.accept()
                dismissed = True
        return dismissed

    async def run_script(self, source: str, *args: Any) -> Any:
        try:
            if args:
                return await self.page.evaluate(source, list(args))
            return await self.page.evaluate(source)
        except PlaywrightError as e:
            msg = f"Script execution failed: {e.message}"
            raise ExecutionError(msg) from e


@contextlib.asynccontextmanager
async def open_page(cfg: Config) -> AsyncIterator[PlaywrightDriver]:
    """
    Launch the configured browser on ``cfg.base_url`` and yield a driver.

    The browser and Playwright are shut down on exit whether or not the
    body raised. Navigation failures surface as :class:`ExecutionError`.
    """
    async with async_playwright() as play:
        browser_type = getattr(play, cfg.browser)
        browser = await browser_type.launch(headless=cfg.headless)
        try:
            context = await browser.new_context()
            page = await context.new_page()
            driver = PlaywrightDriver(page)
            logger.info("open_page: navigating to %s", cfg.base_url)
            try:
                await page.goto(
                    cfg.base_url,
                    wait_until=cfg.navigation.wait_until,
                    timeout=cfg.navigation.timeout_ms,
                )
            except PlaywrightError as e:
                msg = f"Navigation to {cfg.base_url!r} failed: {e.message}"
                raise ExecutionError(msg) from e
            yield driver
        finally:
            await browser.close()
