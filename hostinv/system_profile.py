"""
Host System Profile - enumerates system profile facts across a host query.

A request selects hosts once (the seeded filter clause) and then asks for
any number of system profile fields, each enumerated independently over the
same clause.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import Config, cfg
from .context import FilterClause, RequestContext
from .enumeration import Runner, TermsEnumerator
from .errors import UnknownFieldError
from .host_filter import HostFilter, build_filter_query
from .models import EnumerationArgs, ResultPage
from .validation import check_limit, check_offset

logger = logging.getLogger(__name__)


def to_bool(key: Any) -> bool:
    """Boolean buckets come back keyed 1/0 with a "true"/"false" key_as_string."""
    return str(key).lower() in ("1", "true")


@dataclass(slots=True, frozen=True)
class ProfileField:
    path: str
    convert: Callable[[Any], Any]


SYSTEM_PROFILE_FIELDS: dict[str, ProfileField] = {
    "sap_system": ProfileField("system_profile_facts.sap_system", to_bool),
    "sap_sids": ProfileField("system_profile_facts.sap_sids", str),
    "arch": ProfileField("system_profile_facts.arch", str),
    "os_release": ProfileField("system_profile_facts.os_release", str),
}


def build_host_query(host_filter: Optional[HostFilter], account_number: str) -> FilterClause:
    """Resolve the filter clause for a request without touching any context."""
    return build_filter_query(host_filter, account_number)


def seed_host_query(host_filter: Optional[HostFilter], context: RequestContext) -> dict:
    """Attach the request's host filter clause to the context.

    Must complete before any enumeration in the same request reads the context.
    """
    context.host_query = build_host_query(host_filter, context.account_number)
    return {}


class HostSystemProfile:
    """
    Composes context seeding and per-field enumeration for one request.

    Args:
        runner: Query execution service
        config: Query limits and index name
    """

    __slots__ = ("runner", "config", "enumerators")

    def __init__(self, runner: Runner, config: Config = cfg):
        self.runner = runner
        self.config = config
        self.enumerators: dict[str, TermsEnumerator] = {
            name: TermsEnumerator(profile_field.path, profile_field.convert, runner, config)
            for name, profile_field in SYSTEM_PROFILE_FIELDS.items()
        }

    @property
    def fields(self) -> list[str]:
        return list(self.enumerators)

    async def resolve(
        self,
        host_filter: Optional[HostFilter],
        selections: dict[str, EnumerationArgs],
        account_number: str,
    ) -> dict[str, ResultPage]:
        """
        Enumerate the selected fields over the hosts matched by host_filter.

        Args:
            host_filter: Optional structured host filter
            selections: Field name -> enumeration arguments
            account_number: Tenant the hosts belong to

        Returns:
            Field name -> ResultPage

        Raises:
            UnknownFieldError: If a selected field is not enumerable
            InputValidationError: If any selection has an out-of-bounds limit or offset
        """
        unknown = [name for name in selections if name not in self.enumerators]
        if unknown:
            raise UnknownFieldError(unknown)

        # Reject bad paging for every field before any query goes out
        for args in selections.values():
            check_limit(args.limit, self.config.limit_max)
            check_offset(args.offset)

        context = RequestContext(account_number=account_number)
        seed_host_query(host_filter, context)

        names = list(selections)
        logger.info(f"Enumerating {len(names)} field(s) for account {account_number}: {names}")

        # Enumerations only read the seeded clause; any failure fails the request
        tasks = [
            asyncio.ensure_future(
                self.enumerators[name].enumerate(selections[name], context.host_query)
            )
            for name in names
        ]
        try:
            pages = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
        return dict(zip(names, pages))
