"""ENS name and address resolution.

Resolves ENS names to addresses (forward) and addresses to their primary names
(reverse), then gathers the profile records published by the name's resolver.
Protocol work is delegated to a NamingProvider; this module sequences the calls,
absorbs per-record failures and assembles a ResolutionResult.
"""

import logging
import re
from typing import Dict, Optional

import sentry_sdk

from social.graze.enslookup.model.result import (
    TEXT_RECORD_KEYS,
    ErrorKind,
    LookupKind,
    LookupRequest,
    LookupState,
    ProfileRecords,
    ResolutionResult,
)
from social.graze.enslookup.resolve.provider import NamingProvider, ResolverHandle

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")
HEX_INPUT_PATTERN = re.compile(r"0[xX][0-9a-fA-F]*")


def is_valid_address(candidate: Optional[str]) -> bool:
    """Check if value is a 0x-prefixed, 20 byte hex address.

    Args:
        candidate: String to check

    Returns:
        True if the whole string is 0x followed by exactly 40 hex characters
    """
    return candidate is not None and ADDRESS_PATTERN.fullmatch(candidate) is not None


def parse_input(subject: str) -> LookupRequest:
    """Classify free-form input as a name or an address.

    Input made only of 0x and hex characters is treated as an address, even if it
    has the wrong length, so that bad addresses are reported as such. Anything else,
    including names like 0xsplits.eth, is resolved as a name.

    Args:
        subject: Raw user input

    Returns:
        LookupRequest with the detected kind and the stripped value
    """
    subject = subject.strip()
    if HEX_INPUT_PATTERN.fullmatch(subject) is not None:
        return LookupRequest(kind=LookupKind.reverse, value=subject)
    return LookupRequest(kind=LookupKind.forward, value=subject)


def _advance(result: ResolutionResult, state: LookupState) -> ResolutionResult:
    logger.debug(
        "%s lookup %r: %s -> %s", result.kind.value, result.query, result.state.value, state.value
    )
    result.state = state
    return result


def _stop(
    result: ResolutionResult, state: LookupState, error: ErrorKind
) -> ResolutionResult:
    logger.info("%s lookup %r ended with %s", result.kind.value, result.query, error.value)
    result.error = error
    return _advance(result, state)


async def fetch_text_record(
    provider: NamingProvider, resolver: ResolverHandle, key: str
) -> Optional[str]:
    """Fetch one text record, treating any failure as an absent value."""
    try:
        return await provider.resolver_get_text(resolver, key)
    except Exception as e:
        logger.warning("Could not fetch text record %s for %s: %s", key, resolver.name, e)
        sentry_sdk.capture_exception(e)
        return None


async def fetch_content_hash(
    provider: NamingProvider, resolver: ResolverHandle
) -> Optional[str]:
    """Fetch the content hash, treating any failure as an absent value."""
    try:
        return await provider.resolver_get_content_hash(resolver)
    except Exception as e:
        logger.warning("Could not fetch content hash for %s: %s", resolver.name, e)
        sentry_sdk.capture_exception(e)
        return None


async def aggregate_records(provider: NamingProvider, name: str) -> ProfileRecords:
    """Gather the text records and content hash published for a name.

    A name without a resolver yields no records. Otherwise every key in
    TEXT_RECORD_KEYS gets an entry; a key whose fetch fails is recorded as None
    without affecting the others or the content hash.

    Args:
        provider: Naming provider
        name: Resolved ENS name

    Returns:
        ProfileRecords for the name
    """
    resolver = await provider.get_resolver(name)
    if resolver is None:
        logger.debug("No resolver for %s", name)
        return ProfileRecords(resolver_found=False)

    text_records: Dict[str, Optional[str]] = {}
    for key in TEXT_RECORD_KEYS:
        text_records[key] = await fetch_text_record(provider, resolver, key)

    content_hash = await fetch_content_hash(provider, resolver)

    return ProfileRecords(
        resolver_found=True, text_records=text_records, content_hash=content_hash
    )


def _finish(result: ResolutionResult, records: ProfileRecords) -> ResolutionResult:
    result.text_records = records.text_records
    result.content_hash = records.content_hash
    return _advance(result, LookupState.done)


def _failed(result: ResolutionResult, e: Exception) -> ResolutionResult:
    logger.exception("%s lookup %r failed", result.kind.value, result.query)
    sentry_sdk.capture_exception(e)
    # Nothing discovered before the failure is kept.
    result.primary_address = None
    result.primary_name = None
    result.text_records = {}
    result.content_hash = None
    return _stop(result, LookupState.failed, ErrorKind.resolution_failed)


async def forward_resolve(provider: NamingProvider, name: str) -> ResolutionResult:
    """Resolve an ENS name to an address and gather its profile records.

    Args:
        provider: Naming provider
        name: ENS name, e.g. vitalik.eth

    Returns:
        ResolutionResult with primary_address set, or with error set to
        NameNotFound or ResolutionFailed
    """
    result = ResolutionResult(kind=LookupKind.forward, query=name)
    _advance(result, LookupState.validating)
    if len(name) == 0:
        return _stop(result, LookupState.not_found, ErrorKind.name_not_found)

    try:
        _advance(result, LookupState.resolving)
        address = await provider.resolve_name_to_address(name)
        if address is None:
            return _stop(result, LookupState.not_found, ErrorKind.name_not_found)
        result.primary_address = address

        _advance(result, LookupState.records_loading)
        records = await aggregate_records(provider, name)
    except Exception as e:
        return _failed(result, e)

    return _finish(result, records)


async def reverse_resolve(provider: NamingProvider, address: str) -> ResolutionResult:
    """Resolve an address to its primary ENS name and gather its profile records.

    Malformed addresses are rejected before any network call is made.

    Args:
        provider: Naming provider
        address: 0x-prefixed hex address

    Returns:
        ResolutionResult with primary_name set, or with error set to
        InvalidAddress, NoPrimaryName or ResolutionFailed
    """
    result = ResolutionResult(kind=LookupKind.reverse, query=address)
    _advance(result, LookupState.validating)
    if not is_valid_address(address):
        return _stop(result, LookupState.rejected, ErrorKind.invalid_address)

    try:
        _advance(result, LookupState.resolving)
        name = await provider.resolve_address_to_name(address)
        if name is None:
            return _stop(result, LookupState.not_found, ErrorKind.no_primary_name)
        result.primary_name = name

        _advance(result, LookupState.records_loading)
        records = await aggregate_records(provider, name)
    except Exception as e:
        return _failed(result, e)

    return _finish(result, records)


async def lookup(provider: NamingProvider, request: LookupRequest) -> ResolutionResult:
    """Run the lookup described by a LookupRequest."""
    if request.kind == LookupKind.reverse:
        return await reverse_resolve(provider, request.value)
    return await forward_resolve(provider, request.value)
