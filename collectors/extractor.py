"""
Record extraction from the listing HTML. Uses BeautifulSoup.

Two layers:
- Document query: parse_document / find_descendant_by_class / attribute.
  Thin wrappers so the rest of the code never touches bs4 directly.
- Record extractor: one candidate node -> Record, or UnparseableNode.

Field mapping (thumbnail area unless noted):

    item_id         href                      ""
    item_sequence   data-seq (uint)           0, non-numeric is unparseable
    title           data-ga-name              ""
    kind            data-ga-type == "LIVE"    ONDEMAND
    thumbnail       src of last child w/ src  None
    group_id        href on name area         ""
    group_sequence  data-ga-cseq (uint)       0, non-numeric is unparseable
    group_name      data-ga-cname             ""
    group_kind      data-ga-ctype == "PLUS"   STANDARD
"""

import logging

from bs4 import BeautifulSoup, Tag

from models import ChannelKind, Record, VideoKind

log = logging.getLogger(__name__)

CANDIDATE_CLASS = "video_list_cont"
THUMBNAIL_CLASS = "thumb_area"
NAME_CLASS = "name"


class UnparseableNode(ValueError):
    """A candidate node that can't become a Record. Skipped, never fatal."""


# --- Document query ---

def parse_document(raw: str) -> list[Tag]:
    """Candidate nodes in document order (freshest first on the listing)."""
    soup = BeautifulSoup(raw, "html.parser")
    return soup.find_all(class_=CANDIDATE_CLASS)


def find_descendant_by_class(node: Tag, class_name: str) -> Tag | None:
    """Last descendant carrying class_name, or None."""
    matches = node.find_all(class_=class_name)
    return matches[-1] if matches else None


def attribute(node: Tag, name: str) -> str | None:
    value = node.get(name)
    if value is None:
        return None
    # bs4 hands back multi-valued attributes (class, rel) as lists
    if isinstance(value, list):
        return " ".join(value)
    return value


# --- Record extractor ---

def _parse_uint(value: str | None, field_name: str) -> int:
    if value is None:
        return 0
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        raise UnparseableNode(f"{field_name} is not an unsigned integer: {value!r}")
    return int(value)


def _thumbnail_src(thumb: Tag) -> str | None:
    images = thumb.find_all(src=True)
    if not images:
        return None
    return attribute(images[-1], "src")


def extract_record(node: Tag) -> Record:
    """
    Build a Record from one candidate node.
    Raises UnparseableNode if a structural marker is missing or a
    sequence attribute isn't numeric.
    """
    thumb = find_descendant_by_class(node, THUMBNAIL_CLASS)
    if thumb is None:
        raise UnparseableNode(f"missing .{THUMBNAIL_CLASS}")
    name = find_descendant_by_class(node, NAME_CLASS)
    if name is None:
        raise UnparseableNode(f"missing .{NAME_CLASS}")

    return Record(
        item_id=attribute(thumb, "href") or "",
        item_sequence=_parse_uint(attribute(thumb, "data-seq"), "data-seq"),
        title=attribute(thumb, "data-ga-name") or "",
        kind=VideoKind.LIVE if attribute(thumb, "data-ga-type") == "LIVE" else VideoKind.ONDEMAND,
        thumbnail=_thumbnail_src(thumb),
        group_id=attribute(name, "href") or "",
        group_sequence=_parse_uint(attribute(thumb, "data-ga-cseq"), "data-ga-cseq"),
        group_name=attribute(thumb, "data-ga-cname") or "",
        group_kind=ChannelKind.PREMIUM if attribute(thumb, "data-ga-ctype") == "PLUS" else ChannelKind.STANDARD,
    )


def parse_snapshot(raw: str) -> list[Record]:
    """
    Raw listing HTML -> Snapshot (Records, freshest first).
    Bad nodes are logged and dropped individually.
    """
    records = []
    for index, node in enumerate(parse_document(raw)):
        try:
            records.append(extract_record(node))
        except UnparseableNode as e:
            log.warning(f"Skipping unparseable node #{index}: {e}")
    return records
