"""
ENS Lookup

This module implements a small Ethereum Name Service lookup service. Given an ENS
name it finds the address the name points to; given an address it finds the
address's primary name. In both cases it then collects the profile published by
the name's resolver (avatar, socials, website and friends, plus the content hash)
and renders it as a markdown detail view or JSON.

Key Components:
- app: Web application layer, configuration, metrics and the CLI entry points
- model: Lookup requests, results and the error taxonomy
- present: Markdown rendering, profile links and actions for a result
- resolve: Forward/reverse resolution and record aggregation

Architecture Overview:
1. Resolution:
   - Input is validated locally (addresses must be 0x + 40 hex characters)
   - The primary lookup runs against an Ethereum JSON-RPC node
   - A missing address or primary name ends the lookup

2. Record Aggregation:
   - The name's resolver is queried for each known text record key
   - Individual record failures are absorbed; partial profiles are still shown

3. Presentation:
   - A single ResolutionResult feeds every presenter (markdown, JSON, actions)

The RPC endpoint is configuration, not code. Nothing is cached or persisted.
"""
