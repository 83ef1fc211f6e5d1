"""Naming provider backed by an Ethereum JSON-RPC node.

The resolution workflow only talks to the ``NamingProvider`` protocol. The
default implementation uses web3.py's async ENS module against a configurable
RPC endpoint.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional, Protocol

from aiohttp import ClientSession, ClientTimeout
from ens import AsyncENS, abis
from ens.constants import UNIVERSAL_RESOLVER_ADDR
from ens.utils import dns_encode_name
from web3 import AsyncHTTPProvider, AsyncWeb3

from social.graze.enslookup.resolve.contenthash import decode_content_hash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverHandle:
    """
    A name's resolver contract, bound to the name it was looked up for.

    Attributes:
        name: The ENS name the resolver serves
        node: The namehash of the name, passed to every resolver call
        contract: The resolver contract instance
    """

    name: str
    node: bytes
    contract: Any


class NamingProvider(Protocol):
    async def resolve_name_to_address(self, name: str) -> Optional[str]: ...

    async def resolve_address_to_name(self, address: str) -> Optional[str]: ...

    async def get_resolver(self, name: str) -> Optional[ResolverHandle]: ...

    async def resolver_get_text(
        self, resolver: ResolverHandle, key: str
    ) -> Optional[str]: ...

    async def resolver_get_content_hash(
        self, resolver: ResolverHandle
    ) -> Optional[str]: ...


class Web3NamingProvider:
    """
    NamingProvider implementation using web3.py's AsyncENS.

    Address and primary name lookups go through AsyncENS, which verifies that a
    reverse record resolves forward to the same address. Text records and the
    content hash are read through the Universal Resolver's resolve(name, calldata),
    so wildcard (ENSIP-10) and off-chain (CCIP-read) names return the records their
    resolver serves instead of reverting on a direct contract call.
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self.w3 = w3
        self.ns = AsyncENS.from_web3(w3)
        self.universal_resolver = w3.eth.contract(
            abi=abis.UNIVERSAL_RESOLVER, address=UNIVERSAL_RESOLVER_ADDR
        )

    @classmethod
    async def connect(
        cls,
        rpc_url: str,
        session: Optional[ClientSession] = None,
        timeout: float = 10.0,
    ) -> "Web3NamingProvider":
        """Create a provider for an RPC endpoint, optionally reusing an HTTP session.

        Args:
            rpc_url: JSON-RPC endpoint URL
            session: Shared aiohttp session to send RPC requests through
            timeout: Total timeout in seconds for each RPC request
        """
        http_provider = AsyncHTTPProvider(
            rpc_url, request_kwargs={"timeout": ClientTimeout(total=timeout)}
        )
        if session is not None:
            await http_provider.cache_async_session(session)
        logger.debug("Naming provider using %s", rpc_url)
        return cls(AsyncWeb3(http_provider))

    async def resolve_name_to_address(self, name: str) -> Optional[str]:
        address = await self.ns.address(name)
        if address is None:
            return None
        return str(address)

    async def resolve_address_to_name(self, address: str) -> Optional[str]:
        return await self.ns.name(address)

    async def get_resolver(self, name: str) -> Optional[ResolverHandle]:
        contract = await self.ns.resolver(name)
        if contract is None:
            return None
        return ResolverHandle(
            name=name, node=bytes(self.ns.namehash(name)), contract=contract
        )

    async def resolver_get_text(
        self, resolver: ResolverHandle, key: str
    ) -> Optional[str]:
        value = await self.ns.get_text(resolver.name, key)
        # Unset records come back as empty strings.
        if not value:
            return None
        return value

    async def resolver_get_content_hash(
        self, resolver: ResolverHandle
    ) -> Optional[str]:
        calldata = resolver.contract.encode_abi("contenthash", args=[resolver.node])
        result, _ = await self.universal_resolver.caller.resolve(
            dns_encode_name(resolver.name), calldata
        )
        if not result:
            return None
        (raw,) = self.w3.codec.decode(["bytes"], result)
        return decode_content_hash(raw)
