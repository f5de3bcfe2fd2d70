#!/usr/bin/env python3
"""Print recent DD posts with their tickers, straight from the sheet."""
import sys
from typing import List, Optional

from config import settings
from services.sheet_posts import PostSourceError, SheetPostService
from utils.company_directory import DirectoryLoadError, load_directory_from_csv
from utils.company_matcher import TickerResolver


def parse_days(argv: List[str]) -> Optional[int]:
    """Days back from the first argument, or the configured default. None if invalid."""
    if len(argv) < 2:
        return settings.default_days_back
    try:
        days = int(argv[1])
    except ValueError:
        return None
    return days if days >= 1 else None


def collect(days_back: int) -> bool:
    """Fetch posts and print one line per post."""
    print(f"Fetching DD posts from the last {days_back} day(s)...")

    try:
        directory = load_directory_from_csv(settings.company_csv_path)
    except DirectoryLoadError as e:
        print(f"Error: {e}")
        return False

    try:
        posts = SheetPostService().fetch_resolved_posts(TickerResolver(directory), days_back=days_back)
    except PostSourceError as e:
        print(f"Error: {e}")
        return False

    for post in posts:
        tickers = ", ".join(post['tickers']) if post['tickers'] else "No ticker found"
        print(f"[{tickers}] {post['title']}")
        if post['url']:
            print(f"    {post['url']}")

    print(f"\nAll {len(posts)} posts fetched!")
    return True


if __name__ == "__main__":
    days = parse_days(sys.argv)
    if days is None:
        print(f"Error: days must be a positive integer, got {sys.argv[1]!r}")
        sys.exit(1)
    success = collect(days)
    sys.exit(0 if success else 1)
