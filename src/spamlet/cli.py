"""Command line sitemap builder on top of the crawl engine."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from playwright.sync_api import Page, Response

from .core.config import load_options
from .core.report import SitemapReport
from .crawl.engine import Spamlet

ASSET_ROUTES = "**/*.{png,jpg,jpeg,gif,webp,webm,svg,ico,woff,woff2,ttf}"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a sitemap by crawling a site with Playwright")
    parser.add_argument("url", help="Seed URL")
    parser.add_argument("--allow", help="Allowed domain token (defaults to the seed's host)")
    parser.add_argument("--deny", action="append", default=[], help="Regex of URLs to skip; repeatable")
    parser.add_argument("--depth", type=int, help="Maximum link depth (0 = unlimited)")
    parser.add_argument("--rate-limit", type=float, help="Minimum average seconds between requests")
    parser.add_argument("--browser", choices=["chromium", "firefox", "webkit"], help="Browser engine")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--block-assets", action="store_true", help="Abort image and font requests")
    parser.add_argument("--output", default="sitemap.json", help="Report file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)
    if not (args.allow or urlparse(args.url).netloc):
        parser.error(f"cannot derive an allowed domain from {args.url!r}; pass --allow or a full URL")
    return args


def extract_links(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [anchor["href"] for anchor in soup.find_all("a", href=True)]


def build_crawler(args: argparse.Namespace, report: SitemapReport) -> Spamlet:
    browser_kind, options = load_options(
        browser_kind=args.browser,
        depth=args.depth,
        rate_limit=args.rate_limit,
        headless=False if args.headed else None,
        disable_routes=ASSET_ROUTES if args.block_assets else None,
    )
    allowed = args.allow or urlparse(args.url).netloc
    crawler = Spamlet([allowed], args.deny, browser_kind, options)

    def record_page(page: Page) -> None:
        html = page.content()
        title = BeautifulSoup(html, "html.parser").title
        report.add_page(page.url, title.get_text(strip=True) if title else None)
        for href in extract_links(html):
            link = crawler.sanitize_link(href, page.url)
            if link and crawler.validate_link(link):
                crawler.visit_link(link)

    def record_failure(response: Response) -> None:
        if not response.ok:
            report.add_failure(response.url, response.status)

    crawler.on_page_load(record_page)
    crawler.on_page_response(record_failure)
    return crawler


def run_cli(argv: Optional[Sequence[str]] = None) -> SitemapReport:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    report = SitemapReport(seed_url=args.url)
    crawler = build_crawler(args, report)

    print(f"[*] Crawling {args.url}")
    crawler.crawl(args.url)

    report_path = Path(args.output)
    report.save(report_path)
    print(f"[+] {len(report.pages)} pages, {len(report.failures)} failures")
    print(f"[+] Sitemap saved to {report_path}")
    return report


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
