"""Tests for the OpenSearch query runner and client factory."""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from conftest import OS_BUCKETS, terms_response
from hostinv.search import QueryRunner, create_client


class TestQueryRunner:
    """Test suite for QueryRunner."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.search = AsyncMock(return_value=terms_response(OS_BUCKETS))
        client.ping = AsyncMock(return_value=True)
        client.close = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_run_query_returns_response_body(self, client):
        runner = QueryRunner(client)
        body = {"size": 0, "aggs": {}}

        result = await runner.run_query({"index": "hosts", "body": body}, "arch")

        client.search.assert_awaited_once_with(index="hosts", body=body)
        assert result["aggregations"]["terms"]["buckets"] == OS_BUCKETS

    @pytest.mark.asyncio
    async def test_run_query_logs_token_and_timing(self, client, caplog):
        runner = QueryRunner(client)

        with caplog.at_level(logging.INFO, logger="hostinv.search"):
            await runner.run_query({"index": "hosts", "body": {}}, "system_profile_facts.arch")

        assert "[system_profile_facts.arch] query on hosts took" in caplog.text

    @pytest.mark.asyncio
    async def test_run_query_logs_body_when_enabled(self, client, caplog):
        runner = QueryRunner(client, log_queries=True)

        with caplog.at_level(logging.DEBUG, logger="hostinv.search"):
            await runner.run_query({"index": "hosts", "body": {"size": 0}}, "arch")

        assert '{"size": 0}' in caplog.text

    @pytest.mark.asyncio
    async def test_run_query_reraises_backend_errors(self, client, caplog):
        failure = ConnectionError("refused")
        client.search = AsyncMock(side_effect=failure)
        runner = QueryRunner(client)

        with pytest.raises(ConnectionError) as exc:
            await runner.run_query({"index": "hosts", "body": {}}, "arch")

        assert exc.value is failure
        assert "[arch] query on hosts failed" in caplog.text

    @pytest.mark.asyncio
    async def test_run_query_does_not_swallow_cancellation(self, client):
        client.search = AsyncMock(side_effect=asyncio.CancelledError())
        runner = QueryRunner(client)

        with pytest.raises(asyncio.CancelledError):
            await runner.run_query({"index": "hosts", "body": {}}, "arch")

    @pytest.mark.asyncio
    async def test_ping(self, client):
        assert await QueryRunner(client).ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure_reports_false(self, client):
        client.ping = AsyncMock(side_effect=ConnectionError("down"))
        assert await QueryRunner(client).ping() is False

    @pytest.mark.asyncio
    async def test_close(self, client):
        await QueryRunner(client).close()
        client.close.assert_awaited_once()


class TestCreateClient:
    """Tests for create_client."""

    def test_local_host_uses_plain_http(self):
        with patch("hostinv.search.AsyncOpenSearch") as mock_cls:
            create_client("http://localhost:9200", "us-east-1")

        kwargs = mock_cls.call_args.kwargs
        assert kwargs["hosts"] == ["http://127.0.0.1:9200"]
        assert kwargs["use_ssl"] is False
        assert "http_auth" not in kwargs

    def test_aws_domain_signs_with_es_service(self):
        with patch("hostinv.search.AsyncOpenSearch") as mock_cls, \
             patch("hostinv.search.boto3") as mock_boto3, \
             patch("hostinv.search.AWSV4SignerAsyncAuth") as mock_auth:
            credentials = MagicMock()
            mock_boto3.Session.return_value.get_credentials.return_value = credentials

            create_client("https://search-hosts.us-east-1.es.amazonaws.com", "us-east-1")

        mock_auth.assert_called_once_with(credentials, "us-east-1", "es")
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["hosts"] == [{"host": "search-hosts.us-east-1.es.amazonaws.com", "port": 443}]
        assert kwargs["use_ssl"] is True

    def test_serverless_collection_signs_with_aoss_service(self):
        with patch("hostinv.search.AsyncOpenSearch"), \
             patch("hostinv.search.boto3") as mock_boto3, \
             patch("hostinv.search.AWSV4SignerAsyncAuth") as mock_auth:
            credentials = MagicMock()
            mock_boto3.Session.return_value.get_credentials.return_value = credentials

            create_client("abc123.us-west-2.aoss.amazonaws.com", "us-west-2")

        mock_auth.assert_called_once_with(credentials, "us-west-2", "aoss")

    def test_aws_without_credentials_fails(self):
        with patch("hostinv.search.boto3") as mock_boto3:
            mock_boto3.Session.return_value.get_credentials.return_value = None

            with pytest.raises(RuntimeError):
                create_client("https://search-hosts.us-east-1.es.amazonaws.com", "us-east-1")
