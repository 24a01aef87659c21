"""sactownsports.com: plain story body with YouTube players in <noscript>."""

from ..metadata import default_rules
from ..strategy import CarrierRule, SiteConfig

CONFIG = SiteConfig(
    name="sactownsports",
    namespace="sactownsports-article",
    domains=("sactownsports.com",),
    container_selector="div.story_body",
    text_tags=("p",),
    stop_prefixes=("read more below",),
    carriers=(CarrierRule(tag="noscript", kind="video_iframe"),),
    metadata=default_rules(),
)
