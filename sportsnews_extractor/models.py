"""Models shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EmbedRef(BaseModel):
    """A validated reference to a third-party media embed."""

    model_config = ConfigDict(frozen=True)

    url: str
    provider: str = ""
    html: Optional[str] = None


class SocialEmbed(BaseModel):
    """A social post stripped from the body and kept as article metadata."""

    text: str
    url: str = ""


class ArticleResult(BaseModel):
    """Normalized article record produced by every site strategy."""

    link: str = ""
    title: str = ""
    image: str = ""
    summary: str = ""
    content: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ExtractionResult(BaseModel):
    """The uniform envelope returned by ``extract`` and stored in the cache."""

    error: int = 0
    message: str = ""
    data: Optional[ArticleResult] = None

    @property
    def is_success(self) -> bool:
        """Return True when the extraction produced an article."""
        return self.error == 0 and self.data is not None

    @classmethod
    def failure(cls, message: str) -> "ExtractionResult":
        return cls(error=1, message=message or "extraction failed", data=None)


# ---------------------------------------------------------------------------
# Pipeline-internal content blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextBlock:
    text: str
    kind: str = "text"


@dataclass(frozen=True)
class HeadingBlock:
    text: str
    tag: str = "h2"
    kind: str = "heading"


@dataclass(frozen=True)
class MediaBlock:
    ref: EmbedRef
    kind: str = "media"


ContentBlock = Union[TextBlock, HeadingBlock, MediaBlock]


@dataclass(frozen=True)
class PageMetadata:
    """Document-level fields read from the page head and structure."""

    url: str = ""
    title: str = ""
    description: str = ""
    image: str = ""


def embed_urls(blocks: List[ContentBlock]) -> List[str]:
    """Return the media URLs of ``blocks`` in document order."""
    return [b.ref.url for b in blocks if isinstance(b, MediaBlock)]
