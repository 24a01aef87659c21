"""Configuration-driven extraction strategy shared by every site."""

from __future__ import annotations

import logging
from typing import Iterator, List, Literal, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict, Field

from .assemble import BlockAssembler, plain_text, render_content
from .embeds import CARRIER_EXTRACTORS, collect_social_embeds, remove_carriers
from .errors import ParseError
from .metadata import MetadataRules, default_rules, resolve_metadata
from .models import (
    ArticleResult,
    ContentBlock,
    EmbedRef,
    PageMetadata,
    SocialEmbed,
    embed_urls,
)
from .summary import SUMMARY_MAX, SUMMARY_MIN, make_summary

logger = logging.getLogger(__name__)


class CarrierRule(BaseModel):
    """Which tag carries an embed and how to read it."""

    model_config = ConfigDict(frozen=True)

    tag: str
    kind: Literal["social_link", "video_iframe"]


class SiteConfig(BaseModel):
    """Everything that differs between two sites' markup conventions."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    domains: Tuple[str, ...] = ()

    # Scope: the container to walk, and which nodes inside it to visit.
    # Without an item selector the container's direct element children are
    # visited.
    container_selector: Optional[str] = None
    item_selector: Optional[str] = None

    text_tags: Tuple[str, ...] = ("p",)
    heading_tags: Tuple[str, ...] = ()

    stop_tags: Optional[Tuple[str, ...]] = None
    stop_prefixes: Tuple[str, ...] = ()

    block_list: Tuple[str, ...] = ()
    allow_list: Tuple[str, ...] = ()
    chrome_words: Tuple[str, ...] = ()

    min_length: int = 0
    min_words: int = 0
    skip_link_only: bool = False
    lenient_fallback: bool = False

    carriers: Tuple[CarrierRule, ...] = ()
    excluded_selectors: Tuple[str, ...] = ()
    social_selector: Optional[str] = None

    metadata: MetadataRules = Field(default_factory=default_rules)


def normalize_text(text: str) -> str:
    return " ".join(text.split())


def fold(text: str) -> str:
    """Lowercase with typographic apostrophes folded to ASCII."""
    return text.lower().replace("’", "'").replace("‘", "'")


class ExtractionStrategy:
    """Parses one site's article HTML into an ``ArticleResult``."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        summary_min: int = SUMMARY_MIN,
        summary_max: int = SUMMARY_MAX,
    ) -> None:
        self.config = config
        self.summary_min = summary_min
        self.summary_max = summary_max

    @property
    def name(self) -> str:
        return self.config.name

    # ------------------------------------------------------------------
    # Pipeline entry point
    # ------------------------------------------------------------------

    def parse(self, html: str) -> ArticleResult:
        """Parse raw HTML into an article.

        Raises:
            ParseError: If the document cannot be parsed at all.
        """
        doc = self.parse_document(html)
        meta = self.resolve_metadata(doc)

        container = self.find_container(doc)
        social: List[SocialEmbed] = []
        blocks: List[ContentBlock] = []
        if container is None:
            logger.warning(
                "%s: content container %r not found; returning empty article",
                self.name, self.config.container_selector,
            )
        else:
            social = self.strip_excluded(container)
            blocks = self.classify_blocks(container)

        text = plain_text(blocks)
        return ArticleResult(
            link=meta.url.strip(),
            title=meta.title.strip(),
            image=meta.image.strip(),
            summary=make_summary(
                meta.description, text,
                min_len=self.summary_min, max_len=self.summary_max,
            ),
            content=render_content(blocks),
            metadata={
                "embeds": embed_urls(blocks),
                "social_embeds": [s.model_dump() for s in social],
            },
        )

    @staticmethod
    def parse_document(html: str) -> BeautifulSoup:
        if html is None:
            raise ParseError("No HTML to parse")
        try:
            return BeautifulSoup(html.strip(), "lxml")
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Unable to parse HTML: {exc}") from exc

    def resolve_metadata(self, doc: BeautifulSoup) -> PageMetadata:
        return resolve_metadata(doc, self.config.metadata)

    def find_container(self, doc: BeautifulSoup) -> Optional[Tag]:
        if not self.config.container_selector:
            return doc
        return doc.select_one(self.config.container_selector)

    def strip_excluded(self, container: Tag) -> List[SocialEmbed]:
        """Record then delete carriers this site keeps out of the body."""
        social: List[SocialEmbed] = []
        if self.config.social_selector:
            social = collect_social_embeds(container, self.config.social_selector)
        if self.config.excluded_selectors:
            removed = remove_carriers(container, self.config.excluded_selectors)
            logger.debug("%s: removed %d excluded carriers", self.name, removed)
        return social

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify_blocks(self, container: Tag) -> List[ContentBlock]:
        """Strict pass over the container, lenient pass only if it kept nothing."""
        blocks = self._strict_pass(container)
        if not blocks and self.config.lenient_fallback:
            logger.debug("%s: strict pass kept nothing, using lenient pass", self.name)
            blocks = self._lenient_pass(container)
        return blocks

    def extract_embeds(self, node: Tag) -> Optional[EmbedRef]:
        """EmbedRef for ``node`` if it is a carrier this site recognizes."""
        for rule in self.config.carriers:
            if node.name == rule.tag:
                ref = CARRIER_EXTRACTORS[rule.kind](node)
                if ref is not None:
                    return ref
        return None

    def iter_nodes(self, container: Tag) -> Iterator[Tag]:
        if self.config.item_selector:
            yield from container.select(self.config.item_selector)
        else:
            yield from container.find_all(True, recursive=False)

    def is_stop(self, node: Tag, text: str) -> bool:
        cfg = self.config
        if not cfg.stop_prefixes:
            return False
        if cfg.stop_tags is not None and node.name not in cfg.stop_tags:
            return False
        lowered = text.lower()
        return any(lowered.startswith(p.lower()) for p in cfg.stop_prefixes)

    def is_blocked(self, text: str) -> bool:
        lowered = fold(text)
        if not any(phrase in lowered for phrase in self.config.block_list):
            return False
        return not any(phrase in lowered for phrase in self.config.allow_list)

    def is_chrome(self, text: str) -> bool:
        lowered = text.lower()
        return any(word in lowered for word in self.config.chrome_words)

    def is_link_only(self, node: Tag, text: str) -> bool:
        link = node.find("a")
        return link is not None and normalize_text(link.get_text(" ")) == text

    def accept_text(self, node: Tag, text: str) -> bool:
        cfg = self.config
        if not text or len(text) < cfg.min_length:
            return False
        if cfg.min_words and len(text.split()) < cfg.min_words:
            return False
        if cfg.skip_link_only and self.is_link_only(node, text):
            return False
        return not (self.is_blocked(text) or self.is_chrome(text))

    def _strict_pass(self, container: Tag) -> List[ContentBlock]:
        cfg = self.config
        assembler = BlockAssembler()
        for node in self.iter_nodes(container):
            text = normalize_text(node.get_text(" "))
            if self.is_stop(node, text):
                logger.debug("%s: stop marker %r", self.name, text[:60])
                break

            ref = self.extract_embeds(node)
            if ref is not None:
                assembler.add_media(ref)
            elif node.name in cfg.heading_tags:
                if self.accept_text(node, text):
                    assembler.add_heading(text, node.name)
            elif node.name in cfg.text_tags:
                if self.accept_text(node, text):
                    assembler.add_text(text)
        return assembler.finish()

    def _lenient_pass(self, container: Tag) -> List[ContentBlock]:
        cfg = self.config
        assembler = BlockAssembler()
        for node in container.find_all("p"):
            text = normalize_text(node.get_text(" "))
            if len(text) >= max(cfg.min_length, 1) and not self.is_blocked(text):
                assembler.add_text(text)
        return assembler.finish()
