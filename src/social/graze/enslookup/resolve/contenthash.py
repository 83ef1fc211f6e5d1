"""EIP-1577 content hash decoding.

Resolvers return the content hash as raw bytes: a multicodec namespace prefix
followed by the content identifier. This module renders the common namespaces as
URLs (ipfs://, ipns://, bzz://).
"""

from typing import Optional

import base58

IPFS_PREFIX = bytes.fromhex("e3010170")
IPNS_PREFIX = bytes.fromhex("e5010172")
SWARM_PREFIX = bytes.fromhex("e40101fa011b20")


class UnsupportedContentHash(ValueError):
    """Raised when content hash bytes use a namespace or layout we cannot render."""


def decode_multihash_url(scheme: str, multihash: bytes) -> str:
    """Render a multihash (function code, digest length, digest) as a base58 URL.

    Raises:
        UnsupportedContentHash: If the digest length does not match its header
    """
    if len(multihash) < 2 or len(multihash) - 2 != multihash[1]:
        raise UnsupportedContentHash(f"malformed {scheme} multihash")
    return f"{scheme}://{base58.b58encode(multihash).decode('ascii')}"


def decode_content_hash(raw: Optional[bytes]) -> Optional[str]:
    """Decode resolver content hash bytes into a URL.

    Args:
        raw: Bytes returned by the resolver's contenthash function

    Returns:
        URL string, or None if no content hash is set

    Raises:
        UnsupportedContentHash: If the namespace is not recognised
    """
    if raw is None or len(raw) == 0:
        return None

    if raw.startswith(IPFS_PREFIX):
        return decode_multihash_url("ipfs", raw[len(IPFS_PREFIX) :])

    if raw.startswith(IPNS_PREFIX):
        return decode_multihash_url("ipns", raw[len(IPNS_PREFIX) :])

    if raw.startswith(SWARM_PREFIX):
        digest = raw[len(SWARM_PREFIX) :]
        if len(digest) == 32:
            return f"bzz://{digest.hex()}"

    raise UnsupportedContentHash(f"unsupported content hash 0x{raw.hex()}")
