"""
Shared test configuration and fixtures for ENS lookup tests.
"""

import pytest

from tests.test_helpers import ALICE_ADDRESS, VITALIK_ADDRESS, FakeNamingProvider


@pytest.fixture
def vitalik_provider():
    """Provider where vitalik.eth resolves and only com.twitter is set."""
    return FakeNamingProvider(
        addresses={"vitalik.eth": VITALIK_ADDRESS},
        names={VITALIK_ADDRESS: "vitalik.eth"},
        resolvers={"vitalik.eth": {"com.twitter": "VitalikButerin"}},
    )


@pytest.fixture
def alice_provider():
    """Provider where alice.eth is the primary name of ALICE_ADDRESS but has no resolver."""
    return FakeNamingProvider(
        addresses={"alice.eth": ALICE_ADDRESS},
        names={ALICE_ADDRESS: "alice.eth"},
    )


@pytest.fixture
def populated_provider():
    """Provider with a full profile for nick.eth."""
    return FakeNamingProvider(
        addresses={"nick.eth": VITALIK_ADDRESS},
        names={VITALIK_ADDRESS: "nick.eth"},
        resolvers={
            "nick.eth": {
                "avatar": "https://example.com/avatar.png",
                "description": "Lead developer of ENS",
                "email": "nick@example.com",
                "url": "https://ens.domains",
                "com.twitter": "@nicksdjohnson",
                "com.github": "arachnid",
                "com.discord": "123456789",
                "location": "Auckland",
            }
        },
        content_hashes={"nick.eth": "ipfs://QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4"},
    )
