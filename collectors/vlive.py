"""
VLive page fetcher. Plain requests against the recent-videos listing.

The listing endpoint returns an HTML fragment, one `video_list_cont`
block per video, freshest first. No auth, no pagination past page 1.
"""

import logging
from urllib.parse import urlencode

import requests

from collectors.base import PageFetcher, TransientFetchError
from config.settings import Config

log = logging.getLogger(__name__)


def build_feed_url(config: Config) -> str:
    """Listing URL with page number, page size and ordering applied."""
    query = urlencode({
        "pageNo": config.page_no,
        "pageSize": config.page_size,
        "viewType": config.view_type,
    })
    return f"{config.feed_url}?{query}"


class VLiveFetcher(PageFetcher):
    def __init__(self, config: Config, session: requests.Session | None = None):
        self._timeout = config.request_timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = config.user_agent

    def fetch(self, url: str) -> str:
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransientFetchError(f"GET {url} failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise TransientFetchError(f"GET {url} returned HTTP {resp.status_code}")

        log.debug(f"Fetched {len(resp.text)} chars from {url}")
        return resp.text

    def close(self):
        self._session.close()
