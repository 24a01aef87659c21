"""Unit tests for the metadata resolver."""

from bs4 import BeautifulSoup

from sportsnews_extractor.metadata import (
    MetadataRules,
    Probe,
    meta_probes,
    resolve_metadata,
)
from sportsnews_extractor.sites import hailflorida


def _doc(head: str, body: str = "") -> BeautifulSoup:
    return BeautifulSoup(f"<html><head>{head}</head><body>{body}</body></html>", "lxml")


class TestMetaProbes:
    """Tests for the meta tag cascade."""

    def test_order(self) -> None:
        selectors = [p.selector for p in meta_probes("image")]
        assert selectors == [
            'meta[property="image"]',
            'meta[name="image"]',
            'meta[property="og:image"]',
            'meta[name="og:image"]',
            'meta[property="twitter:image"]',
            'meta[name="twitter:image"]',
        ]


class TestResolveMetadata:
    """Tests for resolve_metadata."""

    def test_open_graph_defaults(self) -> None:
        doc = _doc(
            '<meta property="og:url" content="https://a.com/x">'
            '<meta property="og:title" content=" Title ">'
            '<meta property="og:description" content="Desc">'
            '<meta property="og:image" content="https://a.com/i.jpg">'
        )
        meta = resolve_metadata(doc)
        assert meta.url == "https://a.com/x"
        assert meta.title == "Title"
        assert meta.description == "Desc"
        assert meta.image == "https://a.com/i.jpg"

    def test_missing_fields_default_to_empty(self) -> None:
        meta = resolve_metadata(_doc(""))
        assert (meta.url, meta.title, meta.description, meta.image) == ("", "", "", "")

    def test_twitter_variant_used_when_og_absent(self) -> None:
        doc = _doc('<meta name="twitter:image" content="https://a.com/t.jpg">')
        assert resolve_metadata(doc).image == "https://a.com/t.jpg"

    def test_canonical_link_is_last_resort_for_url(self) -> None:
        doc = _doc('<link rel="canonical" href="https://a.com/canonical">')
        assert resolve_metadata(doc).url == "https://a.com/canonical"

    def test_first_non_empty_wins(self) -> None:
        rules = MetadataRules(
            title=(
                Probe(selector="article h1"),
                Probe(selector='meta[property="og:title"]', attr="content"),
            )
        )
        doc = _doc(
            '<meta property="og:title" content="From meta">',
            "<article><h1>  </h1></article>",
        )
        assert resolve_metadata(doc, rules).title == "From meta"

    def test_structural_probe_beats_meta(self) -> None:
        doc = _doc(
            '<meta property="og:title" content="From meta">',
            "<article><h1>From heading</h1></article>",
        )
        meta = resolve_metadata(doc, hailflorida.CONFIG.metadata)
        assert meta.title == "From heading"

    def test_image_falls_back_to_meta(self) -> None:
        doc = _doc(
            '<meta property="og:image" content="https://a.com/og.jpg">',
            "<article><img alt='no source'></article>",
        )
        meta = resolve_metadata(doc, hailflorida.CONFIG.metadata)
        assert meta.image == "https://a.com/og.jpg"
