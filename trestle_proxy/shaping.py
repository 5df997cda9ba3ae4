from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .utils import media_key

# output field -> upstream field
FIELDS = (
    ("id", "ListingId"),
    ("key", "ListingKeyNumeric"),
    ("status", "StandardStatus"),
    ("price", "ListPrice"),
    ("type", "PropertyType"),
    ("address", "UnparsedAddress"),
    ("bedrooms", "BedroomsTotal"),
    ("bathrooms", "BathroomsFull"),
    ("area", "LivingArea"),
)


def listing_keys(listings: Iterable[dict]) -> List[Any]:
    return [l.get("ListingKeyNumeric") for l in listings if l.get("ListingKeyNumeric")]


def shape_listing(listing: dict, images: Sequence[str]) -> Dict[str, Any]:
    out = {name: listing.get(src) for name, src in FIELDS}
    out["images"] = list(images or [])
    return out


def _images_for(listing: dict, media_map: Mapping[str, Sequence[str]]) -> Sequence[str]:
    key = listing.get("ListingKeyNumeric")
    # keyless listings were never sent to the media endpoint
    return media_map.get(media_key(key), []) if key else []


def shape(listings: Iterable[dict], media_map: Mapping[str, Sequence[str]]) -> List[Dict[str, Any]]:
    return [shape_listing(l, _images_for(l, media_map)) for l in listings]
