from typing import List
import argparse
import asyncio
import json
import logging

import aiohttp

from social.graze.enslookup.app.cli import configure_logging
from social.graze.enslookup.app.config import Settings
from social.graze.enslookup.present.markdown import render_markdown, render_summary
from social.graze.enslookup.resolve.ens import parse_input
from social.graze.enslookup.resolve.provider import Web3NamingProvider
from social.graze.enslookup.resolve.session import LookupSession

logger = logging.getLogger(__name__)


def render(result, output: str) -> str:
    if output == "json":
        return json.dumps(result.model_dump(mode="json"), indent=2)
    if output == "summary":
        return render_summary(result)
    return render_markdown(result)


async def realMain() -> int:
    parser = argparse.ArgumentParser(
        prog="enslookup-resolve", description="Look up ENS names and addresses"
    )
    parser.add_argument(
        "subject", nargs="+", help="ENS name(s) or 0x address(es) to look up."
    )
    parser.add_argument(
        "--rpc-url",
        default=None,
        help="Ethereum JSON-RPC endpoint. Defaults to RPC_URL or the configured default.",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        dest="output",
        action="store_const",
        const="json",
        help="Print results as JSON.",
    )
    output.add_argument(
        "--summary",
        dest="output",
        action="store_const",
        const="summary",
        help="Print one line per result.",
    )

    args = vars(parser.parse_args())

    subjects: List[str] = args.get("subject", [])
    settings = Settings()  # type: ignore
    rpc_url = args.get("rpc_url") or settings.rpc_url

    failed = 0
    async with aiohttp.ClientSession() as session:
        provider = await Web3NamingProvider.connect(
            rpc_url, session=session, timeout=settings.rpc_timeout
        )
        lookup_session = LookupSession(provider)
        for subject in subjects:
            result = await lookup_session.submit(parse_input(subject))
            if result is None:
                continue
            if result.error is not None:
                failed += 1
            print(render(result, args.get("output") or "markdown"))
    return 1 if failed > 0 else 0


def main() -> None:
    configure_logging(logging.WARNING)
    raise SystemExit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
