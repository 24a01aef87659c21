"""hailfloridahail.com: FanSided markup inside <main>, tweets stripped."""

from ..metadata import MetadataRules, Probe, meta_probes
from ..strategy import SiteConfig

BLOCK_LIST = (
    "would you like me to modify",
    "for more information",
    "follow along",
    "stay tuned",
    "more coverage",
    "this story will be updated",
    "read more:",
    "related:",
    "you might also like",
)

TWITTER_CARRIERS = (
    ".twitter-tweet",
    "[data-tweet-id]",
    'iframe[src*="twitter"]',
    'blockquote[class*="twitter"]',
)

IMAGE_SELECTORS = (
    "article img",
    "main img",
    '[role="img"]',
    'img[width="100%"]',
    'img[class*="hero"]',
    'img[class*="featured"]',
)

CONFIG = SiteConfig(
    name="hailflorida",
    namespace="hailflorida-article",
    domains=("hailfloridahail.com",),
    container_selector="main",
    item_selector="p[data-mm-id], h2[data-mm-id], h3[data-mm-id], h4[data-mm-id]",
    text_tags=("p",),
    heading_tags=("h2", "h3", "h4"),
    block_list=BLOCK_LIST,
    chrome_words=("share", "related", "next:", "previous:"),
    min_length=10,
    lenient_fallback=True,
    excluded_selectors=TWITTER_CARRIERS,
    social_selector="blockquote.twitter-tweet",
    metadata=MetadataRules(
        url=(
            Probe(selector='link[rel="canonical"]', attr="href"),
            Probe(selector='meta[property="og:url"]', attr="content"),
        ),
        title=tuple(
            [Probe(selector=s) for s in ("article h1", "main h1", "h1")]
            + meta_probes("title")
            + [Probe(selector="title")]
        ),
        description=tuple([Probe(selector="article h1 + div")] + meta_probes("description")),
        image=tuple(
            [Probe(selector=s, attr="src") for s in IMAGE_SELECTORS] + meta_probes("image")
        ),
    ),
)
