"""Sitemap artifact produced by the command line crawler."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class SitemapReport:
    """Pages and failed responses observed during one crawl."""

    seed_url: str = ""
    pages: Dict[str, Optional[str]] = field(default_factory=dict)
    failures: List[Dict[str, Any]] = field(default_factory=list)

    def add_page(self, url: str, title: Optional[str]) -> None:
        self.pages[url] = title

    def add_failure(self, url: str, status: int) -> None:
        self.failures.append({"url": url, "status": status})

    def to_json(self) -> str:
        data = {
            "seed_url": self.seed_url,
            "pages": [
                {"url": url, "title": self.pages[url]} for url in sorted(self.pages)
            ],
            "failures": self.failures,
        }
        return json.dumps(data, indent=4)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "SitemapReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            seed_url=raw.get("seed_url", ""),
            pages={entry["url"]: entry.get("title") for entry in raw.get("pages", [])},
            failures=list(raw.get("failures", [])),
        )
