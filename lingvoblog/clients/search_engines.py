"""Client for search-engine indexing notifications.

Three independent channels are used for every URL:

- Google sitemap ping. Google has deprecated the endpoint, so a 2xx here is
  best-effort telemetry, not proof that anything was recrawled.
- IndexNow, a shared protocol that forwards to Bing, Yandex, Seznam and Naver.
  The key file must be reachable at ``{site_url}/{key}.txt``.
- Yandex Webmaster sitemap ping.

Failures are recorded per engine and never stop the remaining calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from lingvoblog import metrics
from lingvoblog.models.ping import PingResult, PingStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = structlog.get_logger()

GOOGLE_PING_URL = "https://www.google.com/ping"
INDEXNOW_URL = "https://api.indexnow.org/indexnow"
YANDEX_PING_URL = "https://webmaster.yandex.ru/ping"

GOOGLE_ENGINE = "Google Sitemap Ping"
INDEXNOW_ENGINE = "IndexNow (Bing, Yandex)"
YANDEX_ENGINE = "Yandex Sitemap Ping"


class SearchEngineNotifier:
    """Notifies search engines that pages of ``site_url`` changed."""

    def __init__(self, site_url: str, indexnow_key: str) -> None:
        self.site_url = site_url.rstrip("/")
        self.indexnow_key = indexnow_key

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url}/sitemap.xml"

    @property
    def host(self) -> str:
        return httpx.URL(self.site_url).host

    def notify(self, urls: Sequence[str]) -> list[PingResult]:
        """Ping every engine for every URL, in order, and collect the outcomes.

        Returns:
            One ``PingResult`` per (url, engine) pair: Google, IndexNow,
            Yandex for the first URL, then the same three for the next.
        """
        results: list[PingResult] = []
        with httpx.Client() as client:
            for page_url in urls:
                for engine, send in self._channels(client, page_url):
                    result = self._attempt(engine, send)
                    metrics.search_engine_pings_total.labels(
                        engine=engine, status=result.status.value
                    ).inc()
                    results.append(result)
        logger.info(
            "Search engines notified",
            urls=len(urls),
            succeeded=sum(r.ok for r in results),
            total=len(results),
        )
        return results

    def _channels(
        self, client: httpx.Client, page_url: str
    ) -> list[tuple[str, Callable[[], httpx.Response]]]:
        return [
            (GOOGLE_ENGINE, lambda: self._ping_google(client)),
            (INDEXNOW_ENGINE, lambda: self._submit_indexnow(client, page_url)),
            (YANDEX_ENGINE, lambda: self._ping_yandex(client)),
        ]

    @staticmethod
    def _attempt(engine: str, send: Callable[[], httpx.Response]) -> PingResult:
        try:
            resp = send()
        except httpx.HTTPError as exc:
            logger.warning("Search engine ping failed", engine=engine, error=str(exc))
            return PingResult(engine=engine, status=PingStatus.FAILED, message=str(exc))

        # IndexNow answers 202 when the URL is queued.
        return PingResult(
            engine=engine,
            status=PingStatus.SUCCESS if resp.is_success else PingStatus.FAILED,
            message=f"Status: {resp.status_code}",
        )

    def _ping_google(self, client: httpx.Client) -> httpx.Response:
        return client.get(GOOGLE_PING_URL, params={"sitemap": self.sitemap_url})

    def _submit_indexnow(self, client: httpx.Client, page_url: str) -> httpx.Response:
        return client.post(
            INDEXNOW_URL,
            json={
                "host": self.host,
                "key": self.indexnow_key,
                "keyLocation": f"{self.site_url}/{self.indexnow_key}.txt",
                "urlList": [page_url],
            },
        )

    def _ping_yandex(self, client: httpx.Client) -> httpx.Response:
        return client.get(YANDEX_PING_URL, params={"sitemap": self.sitemap_url})
