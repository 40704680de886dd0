"""Query execution against the host inventory OpenSearch cluster.

QueryRunner is the only place that talks to the backend. It does not retry
or time out on its own; those belong to the client transport.
"""

import json
import logging
from time import perf_counter
from typing import Any

import boto3
from opensearchpy import AsyncHttpConnection, AsyncOpenSearch, AWSV4SignerAsyncAuth

logger = logging.getLogger(__name__)


def create_client(host: str, region: str) -> AsyncOpenSearch:
    """Build an AsyncOpenSearch client, signing requests for AWS-hosted clusters."""
    is_serverless = "aoss.amazonaws.com" in host
    is_aws = "amazonaws.com" in host

    if is_aws:
        credentials = boto3.Session().get_credentials()
        if not credentials:
            raise RuntimeError(f"No AWS credentials available for {host}")

        service = "aoss" if is_serverless else "es"
        hostname = host.removeprefix("https://").rstrip("/")
        logger.info(f"OpenSearch: connecting to {hostname} ({service}, {region})")
        return AsyncOpenSearch(
            hosts=[{"host": hostname, "port": 443}],
            http_auth=AWSV4SignerAsyncAuth(credentials, region, service),
            use_ssl=True,
            verify_certs=True,
            connection_class=AsyncHttpConnection,
        )

    connection_host = host.replace("localhost", "127.0.0.1")
    logger.info(f"OpenSearch: connecting to {connection_host}")
    return AsyncOpenSearch(
        hosts=[connection_host],
        use_ssl=False,
        verify_certs=False,
        connection_class=AsyncHttpConnection,
    )


class QueryRunner:
    """Runs search requests and returns the raw response body.

    Args:
        client: AsyncOpenSearch client instance
        log_queries: Log every request body at debug level
    """

    __slots__ = ("client", "log_queries")

    def __init__(self, client: Any, log_queries: bool = False):
        self.client = client
        self.log_queries = log_queries

    async def run_query(
        self,
        request: dict[str, Any],
        correlation_token: str,
    ) -> dict[str, Any]:
        """
        Execute a search request.

        Args:
            request: {"index": ..., "body": ...}
            correlation_token: Identifies the caller in logs (e.g. the enumerated field)

        Returns:
            Response body as returned by the backend
        """
        index = request["index"]
        body = request["body"]

        if self.log_queries:
            logger.debug(f"[{correlation_token}] query on {index}: {json.dumps(body)}")

        start = perf_counter()
        try:
            result = await self.client.search(index=index, body=body)
        except Exception as e:
            logger.error(f"[{correlation_token}] query on {index} failed: {e}")
            raise

        elapsed_ms = (perf_counter() - start) * 1000
        logger.info(f"[{correlation_token}] query on {index} took {elapsed_ms:.1f}ms")
        return result

    async def ping(self) -> bool:
        """Check whether the cluster answers."""
        try:
            return bool(await self.client.ping())
        except Exception as e:
            logger.warning(f"OpenSearch ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()

