import json
import re

import pytest
import requests

from trestle_proxy import create_app
from trestle_proxy.config import ProxyConfig
from trestle_proxy.utils import media_key


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeUpstream:
    """Token, listings and media endpoints in one object; records every call."""

    def __init__(self, cfg: ProxyConfig):
        self.cfg = cfg
        self.token_response = FakeResponse(200, {"access_token": "tok-123", "expires_in": 3600})
        self.listings = []
        self.media = []
        self.listings_response = None
        self.media_response = None
        self.pages = {}
        self.first_page = None
        self.posts = []
        self.gets = []

    # requests.post
    def post(self, url, data=None, headers=None, timeout=None, **kw):
        self.posts.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return self.token_response

    # requests.get
    def get(self, url, params=None, headers=None, timeout=None, **kw):
        params = dict(params or {})
        self.gets.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if url == self.cfg.media_url:
            return self.media_response or self._media(params["$filter"])
        if url in self.pages:
            return FakeResponse(200, self.pages[url])
        if url == self.cfg.listings_url:
            return self.listings_response or self._listings(params)
        return FakeResponse(404, None, text="no such upstream url")

    def _listings(self, params):
        if "$filter" in params:
            wanted = re.match(r"ListingId eq '(.*)'$", params["$filter"]).group(1).replace("''", "'")
            return FakeResponse(200, {"value": [l for l in self.listings if l.get("ListingId") == wanted]})
        if "$skip" in params:
            skip, top = int(params["$skip"]), int(params["$top"])
            return FakeResponse(200, {"value": self.listings[skip:skip + top]})
        return FakeResponse(200, self.first_page or {"value": self.listings})

    def _media(self, odata_filter):
        m = re.match(r"ResourceRecordKeyNumeric (?:in \((.*)\)|eq (.*))$", odata_filter)
        keys = set((m.group(1) or m.group(2)).split(","))
        return FakeResponse(200, {"value": [r for r in self.media
                                            if media_key(r["ResourceRecordKeyNumeric"]) in keys]})

    @property
    def media_calls(self):
        return [c for c in self.gets if c["url"] == self.cfg.media_url]

    @property
    def listing_calls(self):
        return [c for c in self.gets if c["url"] != self.cfg.media_url]


@pytest.fixture
def cfg():
    return ProxyConfig(
        token_url="https://auth.example.test/token",
        client_id="client-id",
        client_secret="client-secret",
        listings_url="https://api.example.test/odata/Property",
        media_url="https://api.example.test/odata/Media",
        originating_system="ExampleCo",
        request_timeout=5,
    )


@pytest.fixture
def upstream(cfg, monkeypatch):
    fake = FakeUpstream(cfg)
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(requests, "post", fake.post)
    return fake


@pytest.fixture
def app(cfg, upstream):
    app = create_app(cfg)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def make_listing(n, key=None, **extra):
    listing = {
        "ListingId": f"L{n}",
        "ListingKeyNumeric": key if key is not None else 1000 + n,
        "StandardStatus": "Active",
        "ListPrice": 100000 + n,
        "PropertyType": "Residential",
        "UnparsedAddress": f"{n} Main St",
        "BedroomsTotal": 3,
        "BathroomsFull": 2,
        "LivingArea": 1500,
    }
    listing.update(extra)
    return listing
