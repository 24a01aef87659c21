"""Turning classified nodes into ordered blocks, plain text and markup."""

from __future__ import annotations

import html
from typing import List

from .models import ContentBlock, EmbedRef, HeadingBlock, MediaBlock, TextBlock


class BlockAssembler:
    """Accumulates consecutive paragraphs until a heading or media node."""

    def __init__(self) -> None:
        self.blocks: List[ContentBlock] = []
        self._paragraphs: List[str] = []

    def add_text(self, text: str) -> None:
        self._paragraphs.append(text)

    def add_heading(self, text: str, tag: str = "h2") -> None:
        self._flush()
        self.blocks.append(HeadingBlock(text=text, tag=tag))

    def add_media(self, ref: EmbedRef) -> None:
        self._flush()
        self.blocks.append(MediaBlock(ref=ref))

    def finish(self) -> List[ContentBlock]:
        self._flush()
        return self.blocks

    def _flush(self) -> None:
        if self._paragraphs:
            self.blocks.append(TextBlock(text=" ".join(self._paragraphs)))
            self._paragraphs = []


def plain_text(blocks: List[ContentBlock]) -> str:
    """Text and heading content joined with single spaces, media skipped."""
    return " ".join(
        b.text.strip() for b in blocks if isinstance(b, (TextBlock, HeadingBlock))
    )


def render_block(block: ContentBlock) -> str:
    if isinstance(block, TextBlock):
        return f'<p class="text">{html.escape(block.text.strip(), quote=False)}</p>'
    if isinstance(block, HeadingBlock):
        text = html.escape(block.text.strip(), quote=False)
        return f'<{block.tag} class="heading">{text}</{block.tag}>'
    ref = block.ref
    inner = ref.html if ref.html else html.escape(ref.url, quote=False)
    return f'<p class="media">{inner}</p>'


def render_content(blocks: List[ContentBlock]) -> str:
    """Sanitized markup for ``blocks``, one fragment per line, in order."""
    return "\n".join(render_block(b) for b in blocks)
