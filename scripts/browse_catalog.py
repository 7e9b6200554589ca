#!/usr/bin/env python3
"""Live catalog walk-through against a Kutuku-compatible backend.

Logs in, prints the current user, then pages through the catalog.

Credential sourcing:
- KUTUKU_USERNAME
- KUTUKU_PASSWORD

Every ``KUTUKU_*`` setting understood by :meth:`KutukuConfig.from_env`
applies as well.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pykutuku import AsyncError, KutukuClient, KutukuConfig  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--username", default=os.environ.get("KUTUKU_USERNAME", "emilys"))
    parser.add_argument("--password", default=os.environ.get("KUTUKU_PASSWORD", "emilyspass"))
    parser.add_argument("--pages", type=int, default=2, help="Number of catalog pages to fetch")
    parser.add_argument("--search", default="", help="Optional search term")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging (credentials are redacted)")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    async with KutukuClient(KutukuConfig.from_env()) as client:
        await client.session.login(args.username, args.password)
        state = client.session.state
        if isinstance(state, AsyncError):
            print(f"Login failed [{state.code}]: {state.message}", file=sys.stderr)
            return 1
        user = client.session.user
        print(f"Logged in as {user.full_name if user else '?'}")

        catalog = client.catalog
        catalog.add_error_listener(lambda exc: print(f"Loading more failed: {exc}", file=sys.stderr))
        await catalog.load_first_page()
        for _ in range(max(0, args.pages - 1)):
            await catalog.load_more()
        if isinstance(catalog.state, AsyncError):
            print(f"Catalog failed [{catalog.state.code}]: {catalog.state.message}", file=sys.stderr)
            return 1
        for product in catalog.products:
            print(f"{product.id:>4}  {product.title:<40} {product.price:>9.2f}")
        print(f"{catalog.current_count} of {catalog.total} products loaded")

        if args.search:
            page = await client.products.search_products(args.search)
            print(f"Search {args.search!r}: {page.total} matches")

        await client.session.logout()
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
