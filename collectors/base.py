"""
Base page fetcher interface. The notifier only depends on this.
"""

from abc import ABC, abstractmethod


class TransientFetchError(Exception):
    """Network or HTTP failure. The cycle is skipped, never fatal."""


class PageFetcher(ABC):
    """
    A page fetcher turns a URL into raw page content.

    Contract:
    - fetch() returns the page body as text on a 2xx response.
    - Anything else (connection error, timeout, non-2xx) raises
      TransientFetchError. No retries; the next tick is the retry.
    - Fetchers hold no cursor state. Novelty is the notifier's job.
    """

    @abstractmethod
    def fetch(self, url: str) -> str:
        """Fetch raw page content for url."""
        ...

    def close(self):
        """Release any held connections. Optional."""
