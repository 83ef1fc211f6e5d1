"""ENS lookup request and result models.

Defines the input shape accepted by the resolution workflow, the uniform
result object handed to presenters, and the error taxonomy surfaced to users.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, computed_field


TEXT_RECORD_KEYS: Tuple[str, ...] = (
    "avatar",
    "description",
    "email",
    "url",
    "com.twitter",
    "com.github",
    "com.discord",
    "notice",
    "keywords",
    "location",
    "website",
    "header",
)
"""Text record keys fetched for every resolved name, in display order."""


class LookupKind(str, Enum):
    """Direction of a lookup."""

    forward = "forward"
    reverse = "reverse"


class ErrorKind(str, Enum):
    """Terminal errors surfaced to users.

    Failures fetching an individual text record or the content hash are not
    part of this taxonomy; they are absorbed into absent values.
    """

    invalid_address = "InvalidAddress"
    name_not_found = "NameNotFound"
    no_primary_name = "NoPrimaryName"
    resolution_failed = "ResolutionFailed"


class LookupState(str, Enum):
    """Per-invocation lookup state.

    idle -> validating -> resolving -> (not_found | records_loading -> done).
    Invalid input ends in rejected, unexpected exceptions end in failed.
    """

    idle = "idle"
    validating = "validating"
    rejected = "rejected"
    resolving = "resolving"
    not_found = "not_found"
    records_loading = "records_loading"
    done = "done"
    failed = "failed"


TERMINAL_STATES = frozenset(
    {LookupState.rejected, LookupState.not_found, LookupState.done, LookupState.failed}
)


class ResolverState(str, Enum):
    """Distinguishes names without a resolver from resolvers with no records."""

    no_resolver = "no_resolver"
    resolver_empty = "resolver_empty"
    resolver_populated = "resolver_populated"


_ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.invalid_address: "Invalid Ethereum address.",
    ErrorKind.name_not_found: "No address found for this name.",
    ErrorKind.no_primary_name: "No ENS name found for this address.",
}


def error_message(kind: ErrorKind, lookup_kind: LookupKind) -> str:
    """Return the user-facing message for an error kind."""
    if kind == ErrorKind.resolution_failed:
        if lookup_kind == LookupKind.reverse:
            return "Failed to lookup ENS name."
        return "Failed to resolve name."
    return _ERROR_MESSAGES[kind]


class LookupRequest(BaseModel):
    """A single lookup: a name to resolve forward or an address to resolve in reverse."""

    kind: LookupKind
    value: str


class ProfileRecords(BaseModel):
    """Records gathered from a name's resolver."""

    resolver_found: bool = False
    text_records: Dict[str, Optional[str]] = Field(default_factory=dict)
    content_hash: Optional[str] = None


class ResolutionResult(BaseModel):
    """Outcome of one forward or reverse lookup.

    ``text_records`` holds an entry for every key in ``TEXT_RECORD_KEYS`` when
    the name has a resolver and is empty otherwise. When ``error`` is set no
    other resolution data is present.
    """

    kind: LookupKind
    query: str
    state: LookupState = LookupState.idle

    primary_address: Optional[str] = None
    primary_name: Optional[str] = None
    text_records: Dict[str, Optional[str]] = Field(default_factory=dict)
    content_hash: Optional[str] = None
    error: Optional[ErrorKind] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def website(self) -> Optional[str]:
        return self.text_records.get("website") or self.text_records.get("url")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_any_record(self) -> bool:
        return any(value is not None for value in self.text_records.values())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def resolver_state(self) -> Optional[ResolverState]:
        if self.state != LookupState.done:
            return None
        if len(self.text_records) == 0:
            return ResolverState.no_resolver
        if self.has_any_record or self.content_hash is not None:
            return ResolverState.resolver_populated
        return ResolverState.resolver_empty

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return error_message(self.error, self.kind)

    @property
    def display_name(self) -> Optional[str]:
        """The ENS name shown as the title of a detail view."""
        if self.kind == LookupKind.forward:
            return self.query
        return self.primary_name

    @property
    def display_address(self) -> Optional[str]:
        """The address shown alongside the name."""
        if self.kind == LookupKind.reverse:
            return self.query
        return self.primary_address
