"""
Integration tests for the HTTP handlers in social.graze.enslookup.app.handlers

The application runs against an in-memory naming provider and a no-op metrics
client, so no RPC endpoint or StatsD server is needed.
"""

from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from aiohttp.test_utils import TestClient, TestServer

from social.graze.enslookup.app.config import FailureGaugeAppKey, Settings
from social.graze.enslookup.app.metrics import NoOpMetricsClient
from social.graze.enslookup.app.server import start_web_server
from social.graze.enslookup.model.result import LookupKind
from tests.test_helpers import ALICE_ADDRESS, VITALIK_ADDRESS, FakeNamingProvider


@asynccontextmanager
async def client_for(provider, threshold: int = 25):
    settings = Settings(failure_threshold=threshold)
    app = await start_web_server(
        settings, provider=provider, metrics_client=NoOpMetricsClient()
    )
    async with TestClient(TestServer(app)) as client:
        yield client


class TestLookupName:
    """Test suite for GET /api/lookup/name."""

    @pytest.mark.asyncio
    async def test_json(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/api/lookup/name", params={"name": "vitalik.eth"})
            assert resp.status == 200
            body = await resp.json()

        assert body["primary_address"] == VITALIK_ADDRESS
        assert body["text_records"]["com.twitter"] == "VitalikButerin"
        assert body["error"] is None
        assert body["has_any_record"] is True

    @pytest.mark.asyncio
    async def test_markdown(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get(
                "/api/lookup/name", params={"name": "vitalik.eth", "format": "markdown"}
            )
            assert resp.status == 200
            assert resp.content_type == "text/markdown"
            text = await resp.text()

        assert "# vitalik.eth" in text

    @pytest.mark.asyncio
    async def test_not_found(self):
        async with client_for(FakeNamingProvider()) as client:
            resp = await client.get("/api/lookup/name", params={"name": "nobody.eth"})
            assert resp.status == 404
            body = await resp.json()

        assert body["error"] == "NameNotFound"
        assert body["error_message"] == "No address found for this name."

    @pytest.mark.asyncio
    async def test_missing_name(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/api/lookup/name")
            assert resp.status == 400

        assert vitalik_provider.calls == []


class TestLookupAddress:
    """Test suite for GET /api/lookup/address."""

    @pytest.mark.asyncio
    async def test_reverse(self, alice_provider):
        async with client_for(alice_provider) as client:
            resp = await client.get("/api/lookup/address", params={"address": ALICE_ADDRESS})
            assert resp.status == 200
            body = await resp.json()

        assert body["primary_name"] == "alice.eth"
        assert body["text_records"] == {}
        assert body["resolver_state"] == "no_resolver"

    @pytest.mark.asyncio
    async def test_invalid_address(self, alice_provider):
        async with client_for(alice_provider) as client:
            resp = await client.get("/api/lookup/address", params={"address": "0x123"})
            assert resp.status == 400
            body = await resp.json()

        assert body["error"] == "InvalidAddress"
        assert alice_provider.calls == []

    @pytest.mark.asyncio
    async def test_no_primary_name(self):
        async with client_for(FakeNamingProvider()) as client:
            resp = await client.get("/api/lookup/address", params={"address": ALICE_ADDRESS})
            assert resp.status == 404
            body = await resp.json()

        assert body["error"] == "NoPrimaryName"


class TestLookup:
    """Test suite for GET /api/lookup."""

    @pytest.mark.asyncio
    async def test_classifies_address(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/api/lookup", params={"q": VITALIK_ADDRESS})
            body = await resp.json()

        assert body["kind"] == "reverse"
        assert body["primary_name"] == "vitalik.eth"

    @pytest.mark.asyncio
    async def test_classifies_name(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/api/lookup", params={"q": " vitalik.eth "})
            body = await resp.json()

        assert body["kind"] == "forward"
        assert body["query"] == "vitalik.eth"

    @pytest.mark.asyncio
    async def test_classifies_hex_prefixed_name(self):
        provider = FakeNamingProvider(addresses={"0xsplits.eth": ALICE_ADDRESS})
        async with client_for(provider) as client:
            resp = await client.get("/api/lookup", params={"q": "0xsplits.eth"})
            assert resp.status == 200
            body = await resp.json()

        assert body["kind"] == "forward"
        assert body["primary_address"] == ALICE_ADDRESS

    @pytest.mark.asyncio
    async def test_missing_query(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/api/lookup")
            assert resp.status == 400

    @pytest.mark.asyncio
    @patch("social.graze.enslookup.resolve.ens.sentry_sdk")
    async def test_resolution_failed_marks_failure(self, mock_sentry):
        provider = FakeNamingProvider(primary_error=ConnectionError("rpc down"))
        async with client_for(provider, threshold=0) as client:
            resp = await client.get("/api/lookup", params={"q": "vitalik.eth"})
            assert resp.status == 502
            body = await resp.json()

            gauge = client.app[FailureGaugeAppKey]
            assert await gauge.failures(LookupKind.forward) == 1
            assert await gauge.failures(LookupKind.reverse) == 0
            ready = await client.get("/internal/ready")
            assert ready.status == 503
            assert await ready.json() == {"failing": ["forward"]}

        assert body["error"] == "ResolutionFailed"
        assert body["primary_address"] is None


class TestInternal:
    @pytest.mark.asyncio
    async def test_alive(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/internal/alive")
            assert resp.status == 200

    @pytest.mark.asyncio
    async def test_ready(self, vitalik_provider):
        async with client_for(vitalik_provider) as client:
            resp = await client.get("/internal/ready")
            assert resp.status == 200
