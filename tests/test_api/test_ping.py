"""Tests for POST /functions/v1/ping-search-engines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from lingvoblog.clients.search_engines import GOOGLE_PING_URL, INDEXNOW_URL, YANDEX_PING_URL

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

URL = "/functions/v1/ping-search-engines"
PAGE = "https://blog.example.uz/post/smm"


@pytest.fixture()
def engines():
    with respx.mock(assert_all_called=False) as mock:
        mock.get(GOOGLE_PING_URL).mock(return_value=httpx.Response(200))
        mock.post(INDEXNOW_URL, name="indexnow").mock(return_value=httpx.Response(202))
        mock.get(YANDEX_PING_URL).mock(return_value=httpx.Response(200))
        yield mock


class TestPing:
    def test_single_url(self, client: TestClient, engines):
        resp = client.post(URL, json={"url": PAGE})

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["submittedUrls"] == [PAGE]
        assert data["message"] == "URLs submitted to search engines for indexing"
        assert [r["engine"] for r in data["results"]] == [
            "Google Sitemap Ping",
            "IndexNow (Bing, Yandex)",
            "Yandex Sitemap Ping",
        ]
        assert {r["status"] for r in data["results"]} == {"success"}

    def test_urls_list_wins(self, client: TestClient, engines):
        resp = client.post(
            URL, json={"url": "https://ignored.example", "urls": [PAGE, f"{PAGE}-2"]}
        )
        assert resp.status_code == 200
        assert resp.json()["submittedUrls"] == [PAGE, f"{PAGE}-2"]
        assert len(resp.json()["results"]) == 6

    def test_failure_is_reported_not_raised(self, client: TestClient, engines):
        engines.routes["indexnow"].mock(side_effect=httpx.ConnectTimeout("timed out"))
        resp = client.post(URL, json={"url": PAGE})

        assert resp.status_code == 200
        results = resp.json()["results"]
        assert results[1]["status"] == "failed"
        assert results[2]["status"] == "success"

    @pytest.mark.parametrize("body", [{}, {"url": ""}, {"urls": []}, {"urls": "nope"}])
    def test_no_urls(self, client: TestClient, body):
        resp = client.post(URL, json=body)
        assert resp.status_code == 400
        assert resp.json()["error"] == "URL(s) are required"
