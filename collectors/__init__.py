from collectors.base import PageFetcher, TransientFetchError
from collectors.extractor import UnparseableNode, extract_record, parse_snapshot
from collectors.vlive import VLiveFetcher, build_feed_url

__all__ = [
    "PageFetcher",
    "TransientFetchError",
    "UnparseableNode",
    "VLiveFetcher",
    "build_feed_url",
    "extract_record",
    "parse_snapshot",
]
