"""
Tests for record extraction from listing HTML:
- document query helpers
- field mapping and defaults
- skipping of unparseable nodes
"""

import pytest
from bs4 import BeautifulSoup

from conftest import listing_html, video_html
from collectors.extractor import (
    UnparseableNode,
    attribute,
    extract_record,
    find_descendant_by_class,
    parse_document,
    parse_snapshot,
)
from models import ChannelKind, Record, VideoKind


def _node(html: str):
    return parse_document(html)[0]


# ──────────────────────────────────────────────
# Document query
# ──────────────────────────────────────────────

class TestDocumentQuery:
    def test_candidates_in_document_order(self):
        html = listing_html(video_html(seq="3"), video_html(seq="2"), video_html(seq="1"))
        nodes = parse_document(html)
        assert len(nodes) == 3
        seqs = [attribute(find_descendant_by_class(n, "thumb_area"), "data-seq") for n in nodes]
        assert seqs == ["3", "2", "1"]

    def test_no_candidates(self):
        assert parse_document("<html><body><p>maintenance</p></body></html>") == []
        assert parse_document("") == []

    def test_find_descendant_returns_last_match(self):
        soup = BeautifulSoup(
            '<div><span class="x" id="a"></span><span class="x" id="b"></span></div>',
            "html.parser",
        )
        found = find_descendant_by_class(soup.div, "x")
        assert attribute(found, "id") == "b"

    def test_find_descendant_missing(self):
        soup = BeautifulSoup("<div><span></span></div>", "html.parser")
        assert find_descendant_by_class(soup.div, "x") is None

    def test_attribute_missing_is_none(self):
        soup = BeautifulSoup('<a href="/v/1"></a>', "html.parser")
        assert attribute(soup.a, "href") == "/v/1"
        assert attribute(soup.a, "data-seq") is None

    def test_multi_valued_attribute_joined(self):
        soup = BeautifulSoup('<a class="thumb_area big"></a>', "html.parser")
        assert attribute(soup.a, "class") == "thumb_area big"


# ──────────────────────────────────────────────
# Field mapping
# ──────────────────────────────────────────────

class TestExtractRecord:
    def test_full_record(self):
        record = extract_record(_node(video_html(
            seq="12345", name="Dance Practice", vtype="VOD",
            cseq="42", cname="BTS", ctype="BASIC",
            channel_href="/channels/FE619",
            thumbnail="https://img.example/12345.jpg",
        )))
        assert record == Record(
            item_id="/video/12345",
            item_sequence=12345,
            title="Dance Practice",
            kind=VideoKind.ONDEMAND,
            thumbnail="https://img.example/12345.jpg",
            group_id="/channels/FE619",
            group_sequence=42,
            group_name="BTS",
            group_kind=ChannelKind.STANDARD,
        )

    def test_live_and_plus(self):
        record = extract_record(_node(video_html(vtype="LIVE", ctype="PLUS")))
        assert record.kind is VideoKind.LIVE
        assert record.is_live
        assert record.group_kind is ChannelKind.PREMIUM

    def test_unknown_types_fall_back_to_defaults(self):
        record = extract_record(_node(video_html(vtype="PREMIERE", ctype="GOLD")))
        assert record.kind is VideoKind.ONDEMAND
        assert record.group_kind is ChannelKind.STANDARD

    def test_missing_title_defaults_to_empty(self):
        record = extract_record(_node(video_html(name=None)))
        assert record.title == ""

    def test_missing_optional_attributes(self):
        record = extract_record(_node(video_html(
            href=False, seq=None, vtype=None, cseq=None, cname=None, ctype=None,
        )))
        assert record.item_id == ""
        assert record.item_sequence == 0
        assert record.kind is VideoKind.ONDEMAND
        assert record.group_sequence == 0
        assert record.group_name == ""
        assert record.group_kind is ChannelKind.STANDARD

    def test_missing_thumbnail_image(self):
        record = extract_record(_node(video_html(vtype="LIVE", thumbnail=None)))
        assert record.thumbnail is None

    def test_thumbnail_is_last_src_descendant(self):
        html = (
            '<div class="video_list_cont">'
            '<a class="thumb_area" data-seq="5">'
            '<img src="https://img.example/placeholder.gif">'
            '<img src="https://img.example/real.jpg">'
            '</a>'
            '<a class="name" href="/channels/X"></a>'
            '</div>'
        )
        assert extract_record(_node(html)).thumbnail == "https://img.example/real.jpg"

    def test_records_are_immutable(self):
        record = extract_record(_node(video_html()))
        with pytest.raises(AttributeError):
            record.title = "changed"


class TestUnparseable:
    def test_missing_thumbnail_area(self):
        with pytest.raises(UnparseableNode, match="thumb_area"):
            extract_record(_node(video_html(include_thumb=False)))

    def test_missing_name_area(self):
        with pytest.raises(UnparseableNode, match="name"):
            extract_record(_node(video_html(include_name=False)))

    @pytest.mark.parametrize("seq", ["abc", "-5", "1.5", ""])
    def test_non_numeric_sequence(self, seq):
        with pytest.raises(UnparseableNode, match="data-seq"):
            extract_record(_node(video_html(seq=seq)))

    def test_non_numeric_channel_sequence(self):
        with pytest.raises(UnparseableNode, match="data-ga-cseq"):
            extract_record(_node(video_html(cseq="n/a")))


# ──────────────────────────────────────────────
# Snapshot parsing
# ──────────────────────────────────────────────

class TestParseSnapshot:
    def test_keeps_listing_order(self):
        html = listing_html(video_html(seq="30"), video_html(seq="20"), video_html(seq="10"))
        assert [r.item_sequence for r in parse_snapshot(html)] == [30, 20, 10]

    def test_bad_nodes_skipped_individually(self, caplog):
        html = listing_html(
            video_html(seq="30"),
            video_html(seq="oops"),
            video_html(seq="20", include_name=False),
            video_html(seq="10"),
        )
        with caplog.at_level("WARNING"):
            records = parse_snapshot(html)
        assert [r.item_sequence for r in records] == [30, 10]
        assert caplog.text.count("Skipping unparseable node") == 2

    def test_empty_page(self):
        assert parse_snapshot("<ul class='video_list'></ul>") == []
