"""
Unit tests for lookup models in social.graze.enslookup.model.result
"""

from social.graze.enslookup.model.result import (
    TEXT_RECORD_KEYS,
    ErrorKind,
    LookupKind,
    LookupState,
    ResolutionResult,
    ResolverState,
    error_message,
)


def done(kind=LookupKind.forward, **kwargs) -> ResolutionResult:
    return ResolutionResult(kind=kind, query="nick.eth", state=LookupState.done, **kwargs)


def all_keys(**values) -> dict:
    records = {key: None for key in TEXT_RECORD_KEYS}
    records.update(values)
    return records


class TestTextRecordKeys:
    def test_keys_in_display_order(self):
        assert TEXT_RECORD_KEYS == (
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


class TestErrorKind:
    def test_values(self):
        assert ErrorKind.invalid_address.value == "InvalidAddress"
        assert ErrorKind.name_not_found.value == "NameNotFound"
        assert ErrorKind.no_primary_name.value == "NoPrimaryName"
        assert ErrorKind.resolution_failed.value == "ResolutionFailed"

    def test_messages(self):
        assert error_message(ErrorKind.invalid_address, LookupKind.reverse) == (
            "Invalid Ethereum address."
        )
        assert error_message(ErrorKind.name_not_found, LookupKind.forward) == (
            "No address found for this name."
        )
        assert error_message(ErrorKind.no_primary_name, LookupKind.reverse) == (
            "No ENS name found for this address."
        )
        assert error_message(ErrorKind.resolution_failed, LookupKind.forward) == (
            "Failed to resolve name."
        )
        assert error_message(ErrorKind.resolution_failed, LookupKind.reverse) == (
            "Failed to lookup ENS name."
        )


class TestResolutionResult:
    """Test suite for ResolutionResult derived fields."""

    def test_website_prefers_website(self):
        result = done(
            text_records=all_keys(website="https://a.example", url="https://b.example")
        )
        assert result.website == "https://a.example"

    def test_website_falls_back_to_url(self):
        result = done(text_records=all_keys(url="https://b.example"))
        assert result.website == "https://b.example"

    def test_website_absent(self):
        assert done(text_records=all_keys()).website is None
        assert done().website is None

    def test_has_any_record(self):
        assert done(text_records=all_keys(email="n@example.com")).has_any_record is True
        assert done(text_records=all_keys()).has_any_record is False
        assert done().has_any_record is False

    def test_resolver_state_no_resolver(self):
        assert done().resolver_state == ResolverState.no_resolver

    def test_resolver_state_empty(self):
        assert done(text_records=all_keys()).resolver_state == ResolverState.resolver_empty

    def test_resolver_state_populated(self):
        result = done(text_records=all_keys(avatar="a.png"))
        assert result.resolver_state == ResolverState.resolver_populated

    def test_resolver_state_content_hash_only(self):
        result = done(text_records=all_keys(), content_hash="ipfs://QmHash")
        assert result.resolver_state == ResolverState.resolver_populated

    def test_resolver_state_unset_on_error(self):
        result = ResolutionResult(
            kind=LookupKind.reverse,
            query="0x123",
            state=LookupState.rejected,
            error=ErrorKind.invalid_address,
        )
        assert result.resolver_state is None
        assert result.error_message == "Invalid Ethereum address."

    def test_display_fields_forward(self):
        result = done(primary_address="0xabc")
        assert result.display_name == "nick.eth"
        assert result.display_address == "0xabc"

    def test_display_fields_reverse(self):
        result = ResolutionResult(
            kind=LookupKind.reverse,
            query="0xabc",
            state=LookupState.done,
            primary_name="nick.eth",
        )
        assert result.display_name == "nick.eth"
        assert result.display_address == "0xabc"

    def test_json_dump_includes_derived_fields(self):
        result = done(
            primary_address="0xabc", text_records=all_keys(url="https://ens.domains")
        )

        dumped = result.model_dump(mode="json")

        assert dumped["primary_address"] == "0xabc"
        assert dumped["website"] == "https://ens.domains"
        assert dumped["has_any_record"] is True
        assert dumped["resolver_state"] == "resolver_populated"
        assert dumped["error"] is None
        assert dumped["state"] == "done"
        assert dumped["kind"] == "forward"
