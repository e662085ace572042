"""Tests for POST /functions/v1/create-post."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lingvoblog.models import REQUIRED_POST_FIELDS

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from lingvoblog.db import Database

URL = "/functions/v1/create-post"


class TestCreatePost:
    def test_created(self, client: TestClient, db: Database, auth_headers, post_payload):
        resp = client.post(URL, json=post_payload(), headers=auth_headers)

        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is True
        assert data["message"] == "Post created successfully"
        assert data["post"]["slug"] == "smm-strategiya"
        assert data["post"]["published"] is False
        assert data["post"]["url"] == "https://blog.example.uz/post/smm-strategiya"

        stored = db.get_post_by_slug("smm-strategiya")
        assert stored is not None
        assert stored.id == data["post"]["id"]
        assert stored.reading_time == 5
        assert stored.tags == []

    def test_published_post(self, client: TestClient, db: Database, auth_headers, post_payload):
        resp = client.post(
            URL,
            json=post_payload(published=True, tags=["smm"], reading_time=7),
            headers=auth_headers,
        )
        assert resp.status_code == 201
        stored = db.get_post_by_slug("smm-strategiya")
        assert stored.published is True
        assert stored.published_at is not None
        assert stored.tags == ["smm"]
        assert stored.reading_time == 7

    def test_client_supplied_counters_ignored(
        self, client: TestClient, db: Database, auth_headers, post_payload
    ):
        resp = client.post(URL, json=post_payload(views=999, likes=5), headers=auth_headers)
        assert resp.status_code == 201
        assert db.get_post_by_slug("smm-strategiya").views == 0

    @pytest.mark.parametrize("field", REQUIRED_POST_FIELDS)
    def test_missing_required_field(self, client: TestClient, auth_headers, post_payload, field):
        payload = post_payload()
        del payload[field]
        resp = client.post(URL, json=payload, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": f"Missing required field: {field}"}

    def test_empty_required_field(self, client: TestClient, auth_headers, post_payload):
        resp = client.post(URL, json=post_payload(title_ru=""), headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing required field: title_ru"

    def test_first_missing_field_reported(self, client: TestClient, auth_headers):
        resp = client.post(URL, json={"slug": "x"}, headers=auth_headers)
        assert resp.json()["error"] == "Missing required field: title_uz"

    def test_invalid_slug(self, client: TestClient, auth_headers, post_payload):
        resp = client.post(URL, json=post_payload(slug="Not A Slug"), headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid post data"
        assert resp.json()["details"][0]["loc"] == ["slug"]


class TestCreatePostAuth:
    def test_missing_key(self, client: TestClient, db: Database, post_payload):
        resp = client.post(URL, json=post_payload())
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized - Invalid API key"}
        assert db.get_post_by_slug("smm-strategiya") is None

    def test_wrong_key(self, client: TestClient, post_payload):
        resp = client.post(URL, json=post_payload(), headers={"x-api-key": "nope"})
        assert resp.status_code == 401

    def test_auth_checked_before_body(self, client: TestClient):
        resp = client.post(URL, content=b"{not json", headers={"x-api-key": "nope"})
        assert resp.status_code == 401

    def test_unconfigured_key_rejects_everything(
        self, client: TestClient, settings, post_payload
    ):
        client.app.state.settings = settings.model_copy(update={"create_post_api_key": ""})
        resp = client.post(URL, json=post_payload(), headers={"x-api-key": ""})
        assert resp.status_code == 401


class TestCreatePostFailures:
    def test_duplicate_slug(self, client: TestClient, auth_headers, post_payload):
        assert client.post(URL, json=post_payload(), headers=auth_headers).status_code == 201
        resp = client.post(URL, json=post_payload(), headers=auth_headers)

        assert resp.status_code == 500
        data = resp.json()
        assert data["error"] == "Failed to create post"
        assert "UNIQUE" in data["details"]

    def test_malformed_json(self, client: TestClient, auth_headers):
        resp = client.post(
            URL,
            content=b"{not json",
            headers={**auth_headers, "content-type": "application/json"},
        )
        assert resp.status_code == 500
        assert resp.json()["error"] == "Internal server error"

    def test_non_object_body(self, client: TestClient, auth_headers):
        resp = client.post(URL, json=["a"], headers=auth_headers)
        assert resp.status_code == 400

    def test_get_not_allowed(self, client: TestClient):
        resp = client.get(URL)
        assert resp.status_code == 405
        assert resp.json() == {"error": "Method Not Allowed"}
