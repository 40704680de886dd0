"""Host inventory system profile enumeration.

Distinct field values with host counts, paginated and deterministically
ordered, computed by OpenSearch terms aggregations.
"""

from .context import RequestContext
from .enumeration import TermsEnumerator, enumeration_resolver, extract_page
from .errors import BackendExecutionError, InputValidationError, UnknownFieldError
from .host_filter import HostFilter, build_filter_query
from .models import EnumerationArgs, ResultItem, ResultPage, ValuesOrderBy
from .search import QueryRunner, create_client
from .system_profile import HostSystemProfile, build_host_query, seed_host_query

__all__ = [
    "RequestContext",
    "TermsEnumerator",
    "enumeration_resolver",
    "extract_page",
    "BackendExecutionError",
    "InputValidationError",
    "UnknownFieldError",
    "HostFilter",
    "build_filter_query",
    "EnumerationArgs",
    "ResultItem",
    "ResultPage",
    "ValuesOrderBy",
    "QueryRunner",
    "create_client",
    "HostSystemProfile",
    "build_host_query",
    "seed_host_query",
]
