import logging
import requests

from .config import ProxyConfig
from .errors import AuthError


def get_access_token(config: ProxyConfig) -> str:
    """Client-credentials grant against the token endpoint. Not cached: one POST per call."""
    data = {
        "grant_type": "client_credentials",
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "scope": "api",
    }
    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    try:
        r = requests.post(config.token_url, data=data, headers=headers, timeout=config.request_timeout)
    except requests.RequestException as e:
        raise AuthError(f"Token request failed: {e}") from e
    if not r.ok:
        logging.error("Token request failed (%s): %s", r.status_code, r.text)
        raise AuthError(f"Token endpoint returned {r.status_code}", detail=r.text)
    try:
        body = r.json()
    except ValueError as e:
        raise AuthError("Token response is not JSON", detail=r.text) from e
    token = body.get("access_token") if isinstance(body, dict) else None
    if not token:
        raise AuthError("No access_token in token response", detail=r.text)
    return token
