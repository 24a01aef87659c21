"""Command-line interface for sportsnews-extractor."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List

from .cache import KeyValueStore, RedisStore, build_store
from .config import get_settings
from .extractor import ArticleExtractor
from .models import ExtractionResult
from .sites import SITES, get_site, list_sites, site_for_url
from .strategy import SiteConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="sportsnews-extractor",
        description="Extract normalized article records from sports-news pages.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    # --- extract ---
    extract = sub.add_parser("extract", help="Extract one or more article URLs")
    extract.add_argument("urls", nargs="+", help="Article URLs")
    extract.add_argument(
        "--site",
        choices=list_sites(),
        default=None,
        help="Site strategy to use (default: detect from the URL host)",
    )

    # --- forget ---
    forget = sub.add_parser("forget", help="Delete cached results for URLs")
    forget.add_argument("urls", nargs="+", help="Article URLs")
    forget.add_argument(
        "--site",
        choices=list_sites(),
        default=None,
        help="Site namespace (default: detect from the URL host)",
    )

    # --- sites ---
    sub.add_parser("sites", help="List configured sites")

    return p


def _resolve_site(url: str, name: str | None) -> SiteConfig:
    if name:
        return get_site(name)
    cfg = site_for_url(url)
    if cfg is None:
        raise ValueError(f"Cannot detect site for {url}; pass --site")
    return cfg


def _configure_logging(verbose: bool) -> None:
    """Set up root logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def _close(store: KeyValueStore) -> None:
    if isinstance(store, RedisStore):
        await store.aclose()


async def _extract_all(urls: List[str], site: str | None) -> List[ExtractionResult]:
    settings = get_settings()
    store = build_store(settings)
    results: List[ExtractionResult] = []
    try:
        for url in urls:
            try:
                cfg = _resolve_site(url, site)
            except ValueError as exc:
                logger.error("%s", exc)
                results.append(ExtractionResult.failure(str(exc)))
                continue
            extractor = ArticleExtractor.for_site(cfg, settings=settings, store=store)
            results.append(await extractor.extract(url))
    finally:
        await _close(store)
    return results


async def _forget_all(urls: List[str], site: str | None) -> int:
    settings = get_settings()
    store = build_store(settings)
    removed = 0
    try:
        for url in urls:
            cfg = _resolve_site(url, site)
            extractor = ArticleExtractor.for_site(cfg, settings=settings, store=store)
            if await extractor.forget(url):
                removed += 1
            else:
                logger.warning("No cached entry for %s in %s", url, cfg.namespace)
    finally:
        await _close(store)
    return removed


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.cmd == "extract":
        results = asyncio.run(_extract_all(args.urls, args.site))
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        failed = [r for r in results if r.error]
        if failed:
            logger.warning("%d/%d URLs failed", len(failed), len(results))
            return 1
        return 0

    if args.cmd == "forget":
        try:
            removed = asyncio.run(_forget_all(args.urls, args.site))
        except ValueError as exc:
            logger.error("%s", exc)
            return 2
        print(json.dumps({"removed": removed}))
        return 0

    if args.cmd == "sites":
        print(
            json.dumps(
                {name: {"namespace": cfg.namespace, "domains": list(cfg.domains)}
                 for name, cfg in SITES.items()},
                indent=2,
            )
        )
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
