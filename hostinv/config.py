"""Configuration with defaults for a local OpenSearch-backed inventory."""

from dataclasses import dataclass, field
from os import getenv


def _parse_bool(value: str, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if not value:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_int(value: str, default: int) -> int:
    """Parse int from environment variable."""
    try:
        return int(value) if value else default
    except ValueError:
        return default


@dataclass(slots=True, frozen=True)
class Config:
    # ==================== OpenSearch ====================
    opensearch_host: str = field(
        default_factory=lambda: getenv("OPENSEARCH_HOST", "http://localhost:9200")
    )
    # Only used when the host is an AWS domain or serverless collection
    aws_region: str = field(default_factory=lambda: getenv("AWS_REGION", "us-east-1"))
    hosts_index: str = field(
        default_factory=lambda: getenv("HOSTS_INDEX", "xjoin.inventory.hosts")
    )

    # ==================== Queries ====================
    # Upper bound on terms buckets per aggregation; buckets past it are never seen
    max_buckets: int = field(
        default_factory=lambda: _parse_int(getenv("QUERIES_MAX_BUCKETS", ""), 10000)
    )
    limit_max: int = field(
        default_factory=lambda: _parse_int(getenv("QUERIES_LIMIT_MAX", ""), 100)
    )
    default_limit: int = 10

    # ==================== Logging ====================
    log_level: str = field(default_factory=lambda: getenv("LOG_LEVEL", "INFO").upper())
    log_queries: bool = field(
        default_factory=lambda: _parse_bool(getenv("LOG_QUERIES", ""), False)
    )


cfg = Config()
