"""Document-level metadata: canonical URL, title, description, hero image.

Each field is resolved from an ordered list of probes. The first probe
that yields a non-empty value wins; values from different probes are
never merged.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from .models import PageMetadata

logger = logging.getLogger(__name__)


class Probe(BaseModel):
    """A CSS selector plus the attribute to read (text content when None)."""

    model_config = ConfigDict(frozen=True)

    selector: str
    attr: Optional[str] = None


def meta_probes(name: str) -> List[Probe]:
    """The ``<meta>`` cascade for a field: plain, ``og:`` and ``twitter:``."""
    probes: List[Probe] = []
    for prefix in ("", "og:", "twitter:"):
        for key in ("property", "name"):
            probes.append(Probe(selector=f'meta[{key}="{prefix}{name}"]', attr="content"))
    return probes


def og_probes(name: str) -> List[Probe]:
    """Open Graph first, then the rest of the cascade."""
    first = Probe(selector=f'meta[property="og:{name}"]', attr="content")
    return [first] + [p for p in meta_probes(name) if p != first]


class MetadataRules(BaseModel):
    """Per-field probe lists."""

    model_config = ConfigDict(frozen=True)

    url: Tuple[Probe, ...] = Field(default_factory=tuple)
    title: Tuple[Probe, ...] = Field(default_factory=tuple)
    description: Tuple[Probe, ...] = Field(default_factory=tuple)
    image: Tuple[Probe, ...] = Field(default_factory=tuple)


def default_rules() -> MetadataRules:
    return MetadataRules(
        url=tuple(og_probes("url") + [Probe(selector='link[rel="canonical"]', attr="href")]),
        title=tuple(og_probes("title") + [Probe(selector="title")]),
        description=tuple(og_probes("description")),
        image=tuple(og_probes("image")),
    )


def probe_value(doc: BeautifulSoup, probe: Probe) -> str:
    el = doc.select_one(probe.selector)
    if el is None:
        return ""
    if probe.attr is None:
        return el.get_text(" ", strip=True)
    value = el.get(probe.attr) or ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def first_value(doc: BeautifulSoup, probes: Tuple[Probe, ...]) -> str:
    for probe in probes:
        value = probe_value(doc, probe)
        if value:
            return value
    return ""


def resolve_metadata(doc: BeautifulSoup, rules: Optional[MetadataRules] = None) -> PageMetadata:
    """Resolve url, title, description and image; missing fields are ``""``."""
    rules = rules or default_rules()
    meta = PageMetadata(
        url=first_value(doc, rules.url),
        title=first_value(doc, rules.title),
        description=first_value(doc, rules.description),
        image=first_value(doc, rules.image),
    )
    logger.debug("Resolved metadata: url=%r title=%r", meta.url, meta.title)
    return meta
