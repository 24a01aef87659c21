"""si.com: Minute Media markup, every content node tagged with data-mm-id."""

from ..metadata import default_rules
from ..strategy import CarrierRule, SiteConfig

BLOCK_LIST = (
    "don't miss out on any news",
    "more of the latest",
    "please let us know",
    "ensure you follow",
    "follow along to keep track",
    "this story will be updated",
    "for more coverage of",
)

CONFIG = SiteConfig(
    name="sicom",
    namespace="sicom-article",
    domains=("si.com",),
    item_selector="[data-mm-id]",
    text_tags=("p",),
    stop_tags=("h2",),
    stop_prefixes=("How to", "More"),
    block_list=BLOCK_LIST,
    allow_list=("coverage from",),
    min_words=4,
    skip_link_only=True,
    carriers=(CarrierRule(tag="figure", kind="social_link"),),
    metadata=default_rules(),
)
