"""Per-request state shared by sibling enumerations."""

from dataclasses import dataclass
from typing import Any, Optional

# Opaque OpenSearch query DSL
FilterClause = dict[str, Any]


@dataclass(slots=True)
class RequestContext:
    account_number: str
    host_query: Optional[FilterClause] = None
