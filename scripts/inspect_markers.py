"""Inspect a book's markup: tag statistics, explicit markers and navigation."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

import httpx
from bs4 import BeautifulSoup

from book2tei.anchors import build_catalog
from book2tei.navigation import find_navigation_block, read_navigation_entries
from book2tei.segmenter import select_strategy


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect markers and navigation of a book.")
    parser.add_argument("--url", help="URL to fetch")
    parser.add_argument("--file", help="Local HTML/XHTML file path")
    parser.add_argument("--tags", action="store_true", help="Also print tag and class counts")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    html = load_html(url=args.url, file_path=args.file)
    soup = BeautifulSoup(html, "lxml")

    catalog = build_catalog(soup)
    print(f"Strategy: {select_strategy(catalog).name}")
    print(f"Markers: {len(catalog)}")
    for section, count in catalog.family_counts().items():
        if count:
            print(f"  {section.value}: {count}")

    nav = find_navigation_block(soup)
    print("\nNavigation:")
    if nav is None:
        print("  (none)")
    else:
        for entry in read_navigation_entries(nav):
            section = entry.section.value if entry.section else "-"
            print(f"  #{entry.target} [{section}] {entry.label}")

    if args.tags:
        tags, classes = collect_stats(soup)
        print("\nTags:")
        for name, count in tags.most_common():
            print(f"{name}: {count}")
        print("\nClasses:")
        for name, count in classes.most_common():
            print(f"{name}: {count}")


def load_html(*, url: str | None, file_path: str | None) -> bytes:
    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.content

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    return path.read_bytes()


def collect_stats(soup: BeautifulSoup) -> tuple[Counter, Counter]:
    tags = Counter()
    classes = Counter()

    for tag in soup.find_all(True):
        tags[tag.name] += 1
        for cls in tag.get("class", []):
            classes[cls] += 1
    return tags, classes


if __name__ == "__main__":
    main()
