"""
CityInfo API - Middleware Tests
================================

What:  Request ID resolution and the access log line.
"""

import logging

import pytest

from cityinfo.middleware.logging import level_for_status
from cityinfo.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_client_token_is_kept(self):
        assert resolve_request_id("abc-123_x.y") == "abc-123_x.y"

    @pytest.mark.parametrize("value", [None, "", "has space", "a" * 65, "line\nbreak"])
    def test_unsafe_or_missing_values_are_replaced(self, value):
        rid = resolve_request_id(value)
        assert rid != value
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_generated_id_is_echoed(self, test_client):
        response = await test_client.get("/api/cities", headers={"X-Request-ID": "not ok"})
        assert response.headers["X-Request-ID"] != "not ok"
        assert len(response.headers["X-Request-ID"]) == 8


class TestAccessLog:

    def test_level_for_status(self):
        assert level_for_status(200) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(500) == logging.ERROR

    @pytest.mark.asyncio
    async def test_line_carries_route_template(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="cityinfo.access"):
            await test_client.get("/api/cities/3/pointsofinterest/5", headers={"X-Request-ID": "r1"})

        [record] = [r for r in caplog.records if r.name == "cityinfo.access"]
        assert record.route == "/api/cities/{city_id}/pointsofinterest/{point_of_interest_id}"
        assert record.path == "/api/cities/3/pointsofinterest/5"
        assert record.request_id == "r1"
        assert record.status == 200

    @pytest.mark.asyncio
    async def test_unmatched_url_falls_back_to_raw_path(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="cityinfo.access"):
            await test_client.get("/api/towns")

        [record] = [r for r in caplog.records if r.name == "cityinfo.access"]
        assert record.route == "/api/towns"
        assert record.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_health_checks_are_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="cityinfo.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "cityinfo.access"]
