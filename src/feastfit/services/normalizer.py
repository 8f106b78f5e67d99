"""Flatten the candidate businesses out of an upstream chat payload.

The provider has been observed to nest businesses under several paths. Each
known shape is an independent probe in ``BUSINESS_PROBES``; the first probe
that yields a non-empty list wins.
"""

from collections.abc import Callable

BusinessProbe = Callable[[object], list[dict[str, object]]]


def _entity_wrappers(payload: object) -> list[dict[str, object]]:
    """`entities` is a list of wrappers, each holding a `businesses` list."""
    entities = _get(payload, "entities")
    if not isinstance(entities, list):
        return []
    businesses: list[dict[str, object]] = []
    for entity in entities:
        businesses.extend(_business_list(_get(entity, "businesses")))
    return businesses


def _entities_businesses(payload: object) -> list[dict[str, object]]:
    """`entities.businesses` is the list."""
    return _business_list(_get(_get(payload, "entities"), "businesses"))


def _business_search(payload: object) -> list[dict[str, object]]:
    """`entities.business_search.businesses` is the list."""
    business_search = _get(_get(payload, "entities"), "business_search")
    return _business_list(_get(business_search, "businesses"))


BUSINESS_PROBES: tuple[BusinessProbe, ...] = (
    _entity_wrappers,
    _entities_businesses,
    _business_search,
)


def extract_businesses(
    payload: object, probes: tuple[BusinessProbe, ...] = BUSINESS_PROBES
) -> list[dict[str, object]]:
    """Return the first non-empty business list found by ``probes``."""
    for probe in probes:
        businesses = probe(payload)
        if businesses:
            return businesses
    return []


def _get(value: object, key: str) -> object:
    if isinstance(value, dict):
        return value.get(key)
    return None


def _business_list(value: object) -> list[dict[str, object]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]
