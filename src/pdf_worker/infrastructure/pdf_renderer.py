"""Headless Chromium renderer (Playwright) for HTML to PDF conversion."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from pdf_worker.exceptions import RenderEngineError

logger = logging.getLogger(__name__)

# Flags needed to run Chromium inside the Lambda sandbox
LAMBDA_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class PdfRenderer:
    """Renders HTML documents to PDF bytes with a per-call Chromium process."""

    def __init__(
        self,
        executable_path: str = "",
        headless: bool = True,
        timeout_ms: int = 20000,
        launch_args: list[str] | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            executable_path: Chromium binary to launch; empty uses Playwright's bundled build.
            headless: Run Chromium without a display.
            timeout_ms: Limit for loading the HTML into the page.
            launch_args: Extra Chromium command-line flags.
        """
        self._executable_path = executable_path
        self._headless = headless
        self._timeout_ms = timeout_ms
        self._launch_args = LAMBDA_CHROMIUM_ARGS if launch_args is None else launch_args

    @asynccontextmanager
    async def _browser(self) -> AsyncIterator[Browser]:
        """Launch Chromium and close it on every exit path, cancellation included."""
        async with async_playwright() as playwright:
            launch_options = {"headless": self._headless, "args": self._launch_args}
            if self._executable_path:
                launch_options["executable_path"] = self._executable_path

            browser = await playwright.chromium.launch(**launch_options)
            logger.debug("Chromium launched")
            try:
                yield browser
            finally:
                try:
                    await browser.close()
                except PlaywrightError as e:
                    logger.warning("Chromium did not close cleanly: %s", e)

    async def render(self, html: str) -> bytes:
        """
        Render an HTML document to PDF.

        Background graphics are printed; page size is Chromium's default.

        Args:
            html: Raw HTML text.

        Returns:
            PDF bytes.

        Raises:
            RenderEngineError: Launch, content load, or PDF generation failed.
        """
        try:
            async with self._browser() as browser:
                page = await browser.new_page()
                await page.set_content(html, wait_until="load", timeout=self._timeout_ms)
                pdf = await page.pdf(print_background=True)
        except PlaywrightError as e:
            raise RenderEngineError(f"Chromium failed to render PDF: {e}") from e
        except OSError as e:
            raise RenderEngineError(f"Playwright driver could not be started: {e}") from e

        if not pdf:
            raise RenderEngineError("Chromium returned an empty PDF")

        logger.info("Rendered PDF: %d bytes", len(pdf))
        return pdf
