"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from hostinv.config import Config


OS_BUCKETS = [
    {"key": "rhel", "doc_count": 50},
    {"key": "centos", "doc_count": 30},
    {"key": "ubuntu", "doc_count": 30},
]


def terms_response(buckets):
    """Search response body carrying a terms aggregation."""
    return {
        "took": 3,
        "hits": {"total": {"value": sum(b["doc_count"] for b in buckets)}, "hits": []},
        "aggregations": {
            "terms": {
                "doc_count_error_upper_bound": 0,
                "sum_other_doc_count": 0,
                "buckets": buckets,
            }
        },
    }


@pytest.fixture
def config():
    """Config with fixed limits independent of the environment."""
    return Config(
        opensearch_host="http://localhost:9200",
        hosts_index="test.hosts",
        max_buckets=500,
        limit_max=100,
    )


@pytest.fixture
def make_runner():
    """Build a mocked query runner answering with the given buckets."""
    def _make(buckets=OS_BUCKETS):
        runner = MagicMock()
        runner.run_query = AsyncMock(return_value=terms_response(buckets))
        runner.ping = AsyncMock(return_value=True)
        return runner
    return _make


@pytest.fixture
def runner(make_runner):
    return make_runner()
