#!/usr/bin/env python3
"""Fetch wines from the catalog API, optionally filter and search them.

Usage:
    python scripts/fetch_wines.py --limit 500
    python scripts/fetch_wines.py --country France --type Red --query cabernet
    python scripts/fetch_wines.py --server-filter --tannin 3 5 --limit 1000
"""
import argparse
import asyncio
import sys

from wine_catalog.config import settings
from wine_catalog.errors import WineCatalogError
from wine_catalog.models import FilterSpec
from wine_catalog.services import CatalogClient, load_catalog, load_filtered
from wine_catalog.services.filtering import FilterEngine
from wine_catalog.services.search import FuzzyMatcher


def build_spec(args: argparse.Namespace) -> FilterSpec:
    spec = FilterSpec()
    if args.country:
        spec = spec.with_values("countries", args.country)
    if args.subregion:
        spec = spec.with_values("subregions", args.subregion)
    if args.type:
        spec = spec.with_values("wine_types", args.type)
    if args.aroma:
        spec = spec.with_values("aromas", args.aroma)
    if args.price:
        spec = spec.with_range("price_krw", *args.price)
    if args.tannin:
        spec = spec.with_range("tannin", *args.tannin)
    return spec


async def run(args: argparse.Namespace) -> int:
    spec = build_spec(args)
    async with CatalogClient(base_url=args.base_url) as client:
        if args.server_filter:
            result = await load_filtered(client, spec, limit=args.limit)
            records = result.items
        else:
            result = await load_catalog(client, limit=args.limit)
            records = FilterEngine().apply(result.items, spec)

    if args.query:
        records = FuzzyMatcher().search(records, args.query)

    print(f"Server total: {result.total}")
    print(f"Fetched:      {len(result.items)}")
    if result.failed_pages:
        print(f"Failed pages: {', '.join(map(str, result.failed_pages))}")
    print(f"Matching:     {len(records)}")
    for record in records[: args.show]:
        vintage = record.vintage if record.vintage is not None else "NV"
        price = f"{record.price_krw:,} KRW" if record.price_krw is not None else "-"
        print(f"  {record.name} ({vintage}) | {record.country} / {record.subregion} | {price}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch and filter wine catalog records")
    parser.add_argument(
        "--base-url",
        default=settings.api_base_url,
        help=f"Catalog API URL (default: {settings.api_base_url})"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.fetch_limit,
        help="Maximum number of records to fetch"
    )
    parser.add_argument("--query", help="Fuzzy search text")
    parser.add_argument("--country", action="append", help="Accepted country (repeatable)")
    parser.add_argument("--subregion", action="append", help="Accepted subregion (repeatable)")
    parser.add_argument("--type", action="append", help="Accepted wine type (repeatable)")
    parser.add_argument("--aroma", action="append", help="Accepted aroma (repeatable)")
    parser.add_argument("--price", type=int, nargs=2, metavar=("MIN", "MAX"))
    parser.add_argument("--tannin", type=float, nargs=2, metavar=("MIN", "MAX"))
    parser.add_argument(
        "--server-filter",
        action="store_true",
        help="Filter through the API's filter endpoint instead of locally"
    )
    parser.add_argument(
        "--show",
        type=int,
        default=20,
        help="Number of records to print (default: 20)"
    )

    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except WineCatalogError as e:
        print(f"❌ Failed to load wines: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
