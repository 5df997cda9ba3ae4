import logging
from typing import Any, Dict, Iterator, List, Sequence, Type

import requests

from .config import ProxyConfig
from .errors import ProxyError

JSON_ACCEPT = "application/json"
MEDIA_ACCEPT = "application/json;odata.metadata=minimal;IEEE754Compatible=true"


def upstream_headers(config: ProxyConfig, token: str, accept: str = JSON_ACCEPT) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": accept,
        "Originating-System": config.originating_system,
    }


def read_odata(r: requests.Response, error_cls: Type[ProxyError], what: str) -> Dict[str, Any]:
    """Return the OData envelope, raising `error_cls` unless it carries a `value` array."""
    if not r.ok:
        logging.error("%s request failed (%s): %s", what, r.status_code, r.text)
        raise error_cls(f"{what} request returned {r.status_code}", detail=r.text)
    try:
        data = r.json()
    except ValueError as e:
        raise error_cls(f"{what} response is not JSON", detail=r.text) from e
    if not isinstance(data, dict) or not isinstance(data.get("value"), list):
        raise error_cls(f"{what} response has no value array", detail=r.text)
    return data


def get_odata_value(r: requests.Response, error_cls: Type[ProxyError], what: str) -> List[dict]:
    return read_odata(r, error_cls, what)["value"]


def chunked(items: Sequence[Any], size: int) -> Iterator[List[Any]]:
    if size < 1:
        raise ValueError("chunk size must be positive")
    for i in range(0, len(items), size):
        yield list(items[i:i + size])


def odata_quote(s: str) -> str:
    return "'" + str(s).replace("'", "''") + "'"


def media_key(key: Any) -> str:
    # 1234.0 from a lossy float and "1234" from IEEE754Compatible land on the same key
    if isinstance(key, float) and key.is_integer():
        key = int(key)
    return str(key)
