"""
Field value enumeration over host documents.

Computes the distinct values of one keyword field across the hosts matched by
a filter clause, with document counts, as a deterministic paginated listing.
The backend computes the buckets with a terms aggregation; this module shapes
that request and pages through the returned bucket list.
"""

from typing import Any, Awaitable, Callable, Generic, Optional, Protocol, TypeVar
import logging

from .config import Config, cfg
from .context import FilterClause, RequestContext
from .errors import BackendExecutionError
from .models import (
    ORDER_BY_MAPPING,
    Bucket,
    EnumerationArgs,
    PageMeta,
    ResultItem,
    ResultPage,
)
from .validation import check_limit, check_offset

logger = logging.getLogger(__name__)

T = TypeVar("T")
V = TypeVar("V")


class Runner(Protocol):
    async def run_query(self, request: dict[str, Any], correlation_token: str) -> dict[str, Any]:
        ...


def default_value(value: Optional[V], default: V) -> V:
    """Return value unless it is None."""
    return default if value is None else value


def extract_page(items: list[V], limit: int, offset: int) -> list[V]:
    """Contiguous window of at most limit items starting at offset.

    An offset past the end yields an empty page.
    """
    return items[offset:offset + limit]


def _extract_buckets(response: dict[str, Any], correlation_token: str) -> list[Bucket]:
    try:
        raw = response["aggregations"]["terms"]["buckets"]
    except (KeyError, TypeError) as e:
        raise BackendExecutionError(
            correlation_token, f"response has no terms buckets ({e!r})"
        ) from e
    return [Bucket.from_dict(bucket) for bucket in raw]


class TermsEnumerator(Generic[T]):
    """
    Enumerates the values of one indexed field.

    Args:
        field: Indexed keyword field to aggregate on
        convert: Maps a raw bucket key to the exposed value type
        runner: Query execution service
        config: Query limits and index name
    """

    __slots__ = ("field", "convert", "runner", "config")

    def __init__(
        self,
        field: str,
        convert: Callable[[Any], T],
        runner: Runner,
        config: Config = cfg,
    ):
        self.field = field
        self.convert = convert
        self.runner = runner
        self.config = config

    def build_request(self, args: EnumerationArgs, host_query: FilterClause) -> dict[str, Any]:
        """
        Build the aggregation-only search body.

        Args:
            args: Enumeration arguments (ordering and key restriction are used)
            host_query: Filter clause selecting the hosts

        Returns:
            Search request body
        """
        terms: dict[str, Any] = {
            "field": self.field,
            "size": self.config.max_buckets,
            "order": [
                {ORDER_BY_MAPPING[args.order_by]: str(args.order_how)},
                {"_key": "ASC"},  # ties on the primary key must not reorder between runs
            ],
            "show_term_doc_count_error": True,
        }

        search = args.filter.search if args.filter else None
        if search is not None:
            if search.eq:
                terms["include"] = [search.eq]
            elif search.regex:
                terms["include"] = search.regex

        return {
            "_source": [],
            "query": host_query,
            "size": 0,
            "aggs": {"terms": {"terms": terms}},
        }

    async def enumerate(self, args: EnumerationArgs, host_query: FilterClause) -> ResultPage[T]:
        """
        Compute one page of distinct values for the field.

        Args:
            args: Paging, ordering and filter arguments
            host_query: Filter clause produced for this request

        Returns:
            ResultPage with converted values and counts
        """
        check_limit(args.limit, self.config.limit_max)
        check_offset(args.offset)

        limit = default_value(args.limit, self.config.default_limit)
        offset = default_value(args.offset, 0)

        response = await self.runner.run_query(
            {"index": self.config.hosts_index, "body": self.build_request(args, host_query)},
            self.field,
        )

        buckets = _extract_buckets(response, self.field)
        page = extract_page(buckets, limit, offset)

        data = [ResultItem(value=self.convert(bucket.key), count=bucket.doc_count) for bucket in page]

        logger.debug(
            f"{self.field}: {len(data)} of {len(buckets)} values (limit={limit}, offset={offset})"
        )
        return ResultPage(data=data, meta=PageMeta(count=len(data), total=len(buckets)))


def enumeration_resolver(
    field: str,
    convert: Callable[[Any], T],
    runner: Runner,
    config: Config = cfg,
) -> Callable[[EnumerationArgs, RequestContext], Awaitable[ResultPage[T]]]:
    """Create a resolver that enumerates field over the context's host query.

    The context must already hold host_query (see seed_host_query).
    """
    enumerator = TermsEnumerator(field, convert, runner, config)

    async def resolve(args: EnumerationArgs, context: RequestContext) -> ResultPage[T]:
        return await enumerator.enumerate(args, context.host_query)

    return resolve
