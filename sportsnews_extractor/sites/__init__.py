"""Registry of the configured sites."""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import urlsplit

from ..strategy import SiteConfig
from . import hailflorida, sactownsports, sicom

SITES: Dict[str, SiteConfig] = {
    cfg.name: cfg for cfg in (sicom.CONFIG, sactownsports.CONFIG, hailflorida.CONFIG)
}


class UnknownSiteError(KeyError):
    """Raised when no site is configured under a name or for a URL."""

    def __init__(self, what: str):
        super().__init__(f"No site configured for {what!r}.")
        self.what = what


def list_sites() -> List[str]:
    return list(SITES)


def get_site(name: str) -> SiteConfig:
    try:
        return SITES[name]
    except KeyError as exc:
        raise UnknownSiteError(name) from exc


def site_for_url(url: str) -> Optional[SiteConfig]:
    """Return the site whose domain matches the URL's host, if any."""
    host = (urlsplit(url).hostname or "").lower()
    for cfg in SITES.values():
        for domain in cfg.domains:
            if host == domain or host.endswith("." + domain):
                return cfg
    return None
