import logging
from typing import Any, Dict, List, Sequence

import requests

from .config import ProxyConfig
from .errors import UpstreamMediaError
from .utils import MEDIA_ACCEPT, chunked, get_odata_value, media_key, upstream_headers


def _get_media(config: ProxyConfig, token: str, odata_filter: str) -> List[dict]:
    try:
        r = requests.get(config.media_url, params={"$filter": odata_filter},
                         headers=upstream_headers(config, token, MEDIA_ACCEPT),
                         timeout=config.request_timeout)
    except requests.RequestException as e:
        raise UpstreamMediaError(f"Media request failed: {e}") from e
    return get_odata_value(r, UpstreamMediaError, "Media")


def fetch_media_for_keys(config: ProxyConfig, token: str, keys: Sequence[Any]) -> Dict[str, List[str]]:
    """Media URLs per listing key, fetched one chunk at a time.

    Keys in the result go through media_key(). URLs keep the order upstream
    returned them in. Any failing chunk aborts the whole call.
    """
    media_map: Dict[str, List[str]] = {}
    for chunk in chunked(keys, config.media_chunk_size):
        odata_filter = f"ResourceRecordKeyNumeric in ({','.join(media_key(k) for k in chunk)})"
        records = _get_media(config, token, odata_filter)
        for m in records:
            key = m.get("ResourceRecordKeyNumeric")
            if key is None:
                continue
            media_map.setdefault(media_key(key), []).append(m.get("MediaURL"))
    logging.info("Fetched media for %d keys (%d with images)", len(keys), len(media_map))
    return media_map


def fetch_media_for_key(config: ProxyConfig, token: str, key: Any) -> List[str]:
    records = _get_media(config, token, f"ResourceRecordKeyNumeric eq {media_key(key)}")
    return [m.get("MediaURL") for m in records]
