import time
import logging
from typing import Dict, List

import requests

from .config import ProxyConfig
from .errors import NotFoundError, UpstreamListingsError
from .utils import get_odata_value, odata_quote, read_odata, upstream_headers


def _get(config: ProxyConfig, token: str, url: str, params=None) -> requests.Response:
    try:
        return requests.get(url, params=params, headers=upstream_headers(config, token),
                            timeout=config.request_timeout)
    except requests.RequestException as e:
        raise UpstreamListingsError(f"Listings request failed: {e}") from e


def fetch_listings_page(config: ProxyConfig, token: str, skip: int = 0, top: int = 50) -> List[dict]:
    r = _get(config, token, config.listings_url, {"$top": top, "$skip": skip})
    return get_odata_value(r, UpstreamListingsError, "Listings")


def fetch_all_listings(config: ProxyConfig, token: str, top: int = 50) -> List[dict]:
    """Follow @odata.nextLink until it runs out.

    Bounded by config.max_pages and config.pagination_deadline; a next link
    pointing at a page we already fetched is treated as a loop.
    """
    started = time.monotonic()
    followed = set()
    out: List[dict] = []
    url, params = config.listings_url, {"$top": top}
    pages = 0
    while url:
        if pages >= config.max_pages:
            raise UpstreamListingsError(f"Pagination exceeded {config.max_pages} pages")
        if time.monotonic() - started > config.pagination_deadline:
            raise UpstreamListingsError(f"Pagination exceeded {config.pagination_deadline}s")
        data = read_odata(_get(config, token, url, params), UpstreamListingsError, "Listings")
        pages += 1
        out.extend(data["value"])
        url, params = data.get("@odata.nextLink"), None
        if url in followed:
            raise UpstreamListingsError(f"Pagination loop at {url}", detail=url)
        followed.add(url)
    logging.info("Fetched %d listings over %d pages", len(out), pages)
    return out


def fetch_listing_by_id(config: ProxyConfig, token: str, listing_id: str) -> Dict:
    r = _get(config, token, config.listings_url, {"$filter": f"ListingId eq {odata_quote(listing_id)}"})
    value = get_odata_value(r, UpstreamListingsError, "Listings")
    if not value:
        raise NotFoundError(f"Listing {listing_id} not found")
    return value[0]
