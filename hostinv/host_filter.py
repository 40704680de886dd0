"""
Host Filter - builds the OpenSearch filter clause for a host query.

Translates a structured host filter (AND/OR/NOT combinators plus per-field
predicates) into bool query DSL scoped to one tenant account. The result is
the clause every field enumeration in a request aggregates over.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .context import FilterClause


class EqFilter(BaseModel):
    eq: Optional[str] = None


class StringFilter(BaseModel):
    """Exact or wildcard (* and ?) match on a keyword field."""
    eq: Optional[str] = None
    matches: Optional[str] = None


class BooleanFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_: Optional[bool] = Field(None, alias="is")


class ContainsFilter(BaseModel):
    contains: Optional[list[str]] = None


class HostFilter(BaseModel):
    """Structured host filter expression."""
    model_config = ConfigDict(populate_by_name=True)

    and_: Optional[list["HostFilter"]] = Field(None, alias="AND")
    or_: Optional[list["HostFilter"]] = Field(None, alias="OR")
    not_: Optional["HostFilter"] = Field(None, alias="NOT")

    id: Optional[EqFilter] = None
    insights_id: Optional[EqFilter] = None
    display_name: Optional[StringFilter] = None
    fqdn: Optional[StringFilter] = None

    spf_arch: Optional[EqFilter] = None
    spf_os_release: Optional[EqFilter] = None
    spf_sap_system: Optional[BooleanFilter] = None
    spf_sap_sids: Optional[ContainsFilter] = None


HostFilter.model_rebuild()


# Filter name -> indexed field
FIELD_PATHS = {
    "id": "id",
    "insights_id": "canonical_facts.insights_id",
    "display_name": "display_name",
    "fqdn": "canonical_facts.fqdn",
    "spf_arch": "system_profile_facts.arch",
    "spf_os_release": "system_profile_facts.os_release",
    "spf_sap_system": "system_profile_facts.sap_system",
    "spf_sap_sids": "system_profile_facts.sap_sids",
}


def _string_clause(path: str, value: StringFilter) -> list[dict[str, Any]]:
    clauses: list[dict[str, Any]] = []
    if value.eq is not None:
        clauses.append({"term": {path: value.eq}})
    if value.matches is not None:
        clauses.append({
            "wildcard": {
                path: {"value": value.matches, "case_insensitive": True}
            }
        })
    return clauses


def _field_clauses(host_filter: HostFilter) -> list[dict[str, Any]]:
    """Build one clause per predicate set on this filter level."""
    clauses: list[dict[str, Any]] = []

    for name in ("id", "insights_id", "spf_arch", "spf_os_release"):
        value = getattr(host_filter, name)
        if value is not None and value.eq is not None:
            clauses.append({"term": {FIELD_PATHS[name]: value.eq}})

    for name in ("display_name", "fqdn"):
        value = getattr(host_filter, name)
        if value is not None:
            clauses.extend(_string_clause(FIELD_PATHS[name], value))

    if host_filter.spf_sap_system is not None and host_filter.spf_sap_system.is_ is not None:
        clauses.append({
            "term": {FIELD_PATHS["spf_sap_system"]: host_filter.spf_sap_system.is_}
        })

    if host_filter.spf_sap_sids is not None and host_filter.spf_sap_sids.contains:
        # every listed SID must be present
        clauses.extend(
            {"term": {FIELD_PATHS["spf_sap_sids"]: sid}}
            for sid in host_filter.spf_sap_sids.contains
        )

    return clauses


def resolve_filter(host_filter: HostFilter) -> list[dict[str, Any]]:
    """
    Recursively translate a host filter into a list of clauses that must all match.

    Args:
        host_filter: Filter expression

    Returns:
        List of query DSL clauses (empty when the filter sets nothing)
    """
    clauses = _field_clauses(host_filter)

    if host_filter.and_:
        for child in host_filter.and_:
            clauses.extend(resolve_filter(child))

    if host_filter.or_:
        clauses.append({
            "bool": {
                "should": [
                    {"bool": {"filter": resolve_filter(child)}}
                    for child in host_filter.or_
                ],
                "minimum_should_match": 1,
            }
        })

    if host_filter.not_ is not None:
        clauses.append({
            "bool": {"must_not": [{"bool": {"filter": resolve_filter(host_filter.not_)}}]}
        })

    return clauses


def build_filter_query(
    host_filter: Optional[HostFilter],
    account_number: str,
) -> FilterClause:
    """
    Build the tenant-scoped filter clause for a host query.

    Args:
        host_filter: Optional structured filter
        account_number: Tenant account the hosts must belong to

    Returns:
        OpenSearch bool query
    """
    clauses: list[dict[str, Any]] = [{"term": {"account": account_number}}]
    if host_filter is not None:
        clauses.extend(resolve_filter(host_filter))
    return {"bool": {"filter": clauses}}
