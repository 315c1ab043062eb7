"""
Shared helpers: listing HTML builders and a scripted fetcher.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from collectors.base import PageFetcher, TransientFetchError
from config.settings import Config


def video_html(
    seq="100",
    name="Morning Live",
    vtype="VOD",
    cseq="7",
    cname="Channel A",
    ctype="BASIC",
    href=None,
    channel_href="/channels/FE619",
    thumbnail="https://img.example/100.jpg",
    include_thumb=True,
    include_name=True,
) -> str:
    """One `video_list_cont` block shaped like the real listing."""
    attrs = []
    if href is not False:
        attrs.append(f'href="{href or f"/video/{seq}"}"')
    for attr, value in [
        ("data-seq", seq),
        ("data-ga-name", name),
        ("data-ga-type", vtype),
        ("data-ga-cseq", cseq),
        ("data-ga-cname", cname),
        ("data-ga-ctype", ctype),
    ]:
        if value is not None:
            attrs.append(f'{attr}="{value}"')

    img = f'<img src="{thumbnail}" alt="">' if thumbnail else '<span class="play"></span>'
    thumb = f'<a class="thumb_area" {" ".join(attrs)}>{img}</a>' if include_thumb else ""
    channel = (
        f'<div class="video_date"><a class="name" href="{channel_href}">{cname}</a></div>'
        if include_name else ""
    )
    return f'<li><div class="video_list_cont">{thumb}{channel}</div></li>'


def listing_html(*blocks: str) -> str:
    return f'<ul class="video_list">{"".join(blocks)}</ul>'


def listing_for(*seqs: int) -> str:
    """Listing with one well-formed video per sequence, in the given order."""
    return listing_html(*(video_html(seq=str(s), name=f"Video {s}") for s in seqs))


class ScriptedFetcher(PageFetcher):
    """
    Returns pages from a script, one per fetch. An Exception instance in
    the script is raised instead. The last entry repeats forever.
    """

    def __init__(self, *pages):
        self._pages = list(pages)
        self.urls: list[str] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.urls)

    def fetch(self, url: str) -> str:
        self.urls.append(url)
        page = self._pages.pop(0) if len(self._pages) > 1 else self._pages[0]
        if isinstance(page, Exception):
            raise page
        return page

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return Config(
        feed_url="http://feed.test/home/video/more",
        page_no=1,
        page_size=5,
        view_type="recent",
        poll_interval=0.01,
        request_timeout=2.0,
        user_agent="vlive-notify-tests",
    )


@pytest.fixture
def transient():
    return TransientFetchError("connection refused")
