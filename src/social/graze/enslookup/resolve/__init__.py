"""
ENS Resolution

This package resolves Ethereum Name Service names and addresses and gathers the
profile records attached to them.

Key Components:
- ens.py: Forward and reverse resolution, address validation and record aggregation
- provider.py: NamingProvider protocol and the web3.py implementation
- contenthash.py: EIP-1577 content hash decoding
- session.py: Latest-wins lookup session for interactive front ends
- __main__.py: CLI interface for resolution

Resolution Types:
1. Forward Resolution
   - Name to address via the name's resolver
   - Fails with NameNotFound when no address is set

2. Reverse Resolution
   - Address to primary name via the reverse registrar
   - Malformed addresses are rejected locally with InvalidAddress
   - Fails with NoPrimaryName when no primary name is set

Both directions then look up the name's resolver and read a fixed set of text
records and the content hash. A failure reading any single record only blanks
that record; the lookup as a whole still succeeds.
"""
