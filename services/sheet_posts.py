"""DD post source backed by a public Google Sheet (gviz JSON endpoint)."""
import json
import time
from typing import Dict, List, Optional

import requests

from config import settings
from utils.company_matcher import TickerResolver


GVIZ_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:json"
SECONDS_PER_DAY = 86400


class PostSourceError(Exception):
    pass


def _strip_gviz_wrapper(text: str) -> str:
    # Payload arrives as: /*O_o*/ google.visualization.Query.setResponse({...});
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise PostSourceError("gviz response does not contain a JSON object")
    return text[start:end + 1]


def coerce_created_utc(value) -> Optional[float]:
    """Keep digits and dots only, then parse; the sheet sometimes stores text."""
    if value is None:
        return None
    cleaned = "".join(char for char in str(value) if "0" <= char <= "9" or char == ".")
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_gviz_response(text: str) -> List[Dict]:
    """
    Parse a gviz JSON response into post dictionaries.

    Args:
        text: Raw response body

    Returns:
        Posts in sheet order with id, title, url, created_utc and raw row
    """
    try:
        payload = json.loads(_strip_gviz_wrapper(text))
        table = payload["table"]
        headers = [col.get("label") for col in table["cols"]]
        rows = table.get("rows") or []
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
        raise PostSourceError(f"Malformed gviz response: {e}") from e

    posts = []
    for row in rows:
        cells = row.get("c") or []
        raw = {}
        for i, header in enumerate(headers):
            cell = cells[i] if i < len(cells) else None
            raw[header] = cell.get("v") if cell else None

        posts.append({
            'id': raw.get('id'),
            'title': str(raw.get('title') or ''),
            'url': raw.get('permalink') or raw.get('url'),
            'created_utc': coerce_created_utc(raw.get('created_utc')),
            'raw': raw,
        })

    return posts


def filter_recent(posts: List[Dict], days_back: int = 1, now: Optional[float] = None) -> List[Dict]:
    """
    Keep posts created within the last days_back days, newest first.

    Args:
        posts: Parsed posts
        days_back: Size of the time range in days
        now: Current unix time (defaults to time.time())

    Returns:
        Filtered and sorted posts
    """
    if now is None:
        now = time.time()
    cutoff = int(now) - days_back * SECONDS_PER_DAY

    recent = [p for p in posts if p['created_utc'] is not None and p['created_utc'] >= cutoff]
    return sorted(recent, key=lambda p: p['created_utc'], reverse=True)


class SheetPostService:
    """Fetch DD posts mirrored into a Google Sheet."""

    def __init__(self, sheet_id: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize the sheet source from settings unless overridden."""
        self.sheet_id = sheet_id or settings.sheet_id
        self.timeout = timeout or settings.sheet_request_timeout

    @property
    def url(self) -> str:
        return GVIZ_URL.format(sheet_id=self.sheet_id)

    def fetch_raw(self) -> str:
        """Download the raw gviz response."""
        try:
            resp = requests.get(self.url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise PostSourceError(f"Could not reach sheet {self.sheet_id}: {e}") from e
        if resp.status_code != 200:
            raise PostSourceError(f"Non-200 status {resp.status_code} for {self.url}")
        return resp.text

    def fetch_posts(self, days_back: int = 1) -> List[Dict]:
        """
        Get posts from the last days_back days.

        Args:
            days_back: Time range in days

        Returns:
            Posts sorted newest first
        """
        posts = parse_gviz_response(self.fetch_raw())
        recent = filter_recent(posts, days_back=days_back)
        print(f"Sheet: {len(recent)} of {len(posts)} posts within {days_back} day(s)")
        return recent

    def fetch_resolved_posts(self, resolver: TickerResolver, days_back: int = 1) -> List[Dict]:
        """Get recent posts with a 'tickers' list attached to each."""
        return [
            {**post, 'tickers': resolver.resolve(post['title'])}
            for post in self.fetch_posts(days_back=days_back)
        ]
