"""Report renderer HTTP client with exponential backoff retry logic"""

import asyncio
from dataclasses import asdict
import httpx
from woundcare_revenue.config import settings
from woundcare_revenue.domain.models import ProgressionReport
from woundcare_revenue.domain.exceptions import ReportRenderError
from woundcare_revenue.infrastructure.observability.metrics import renderer_latency_histogram, renderer_failure_counter


class ReportRendererClient:
    """Client for the external document renderer"""

    def __init__(
        self,
        render_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.render_url = render_url or settings.report_renderer_url
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self.max_retries = settings.renderer_max_retries if max_retries is None else max_retries
        self.backoff_base = settings.renderer_backoff_base if backoff_base is None else backoff_base

    async def render(self, report: ProgressionReport) -> bytes:
        """
        Render a progression report table to a landscape PDF.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base ... (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures
        - 4xx means the payload was rejected, so it fails immediately
        - Tracks latency histogram and failure counter

        Raises:
            ReportRenderError: Renderer rejected the report or stayed unavailable
        """
        payload = {"orientation": "landscape", **asdict(report)}
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    with renderer_latency_histogram.time():
                        response = await client.post(self.render_url, json=payload)
                        response.raise_for_status()
                    return response.content

                except httpx.HTTPStatusError as e:
                    attempt += 1
                    renderer_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise ReportRenderError(f"Renderer rejected report: {e.response.status_code}") from e
                    if attempt >= self.max_retries:
                        raise ReportRenderError(
                            f"Renderer error after {attempt} attempts: {e.response.status_code}"
                        ) from e

                except httpx.RequestError as e:
                    attempt += 1
                    renderer_failure_counter.inc()
                    if attempt >= self.max_retries:
                        raise ReportRenderError(f"Renderer unavailable after {attempt} attempts: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)
