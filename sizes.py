#!/usr/bin/env python3
"""
Stack Size Tiers
================

Static table of default replica counts per component for each supported
stack size. The table is built once at import time and is only reachable
through the lookup helpers below.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from components import Component


class UnknownSizeError(ValueError):
    """Raised when a size tier is not present in the size table"""


class SizeTier(str, Enum):
    """Supported stack sizes, declared from smallest to largest capacity"""
    EXTRA_SMALL = "1x.extra-small"
    SMALL = "1x.small"
    MEDIUM = "1x.medium"

    @classmethod
    def parse(cls, value: Any) -> "SizeTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownSizeError(f"Unknown stack size: {value!r}") from None


def _freeze(replicas: Mapping[Component, int]) -> Mapping[Component, int]:
    return MappingProxyType(dict(replicas))


_REPLICAS_BY_SIZE = MappingProxyType({
    SizeTier.EXTRA_SMALL: _freeze({
        Component.DISTRIBUTOR: 2,
        Component.INGESTER: 2,
        Component.QUERIER: 2,
        Component.QUERY_FRONTEND: 2,
        Component.GATEWAY: 2,
        Component.INDEX_GATEWAY: 2,
    }),
    SizeTier.SMALL: _freeze({
        Component.DISTRIBUTOR: 2,
        Component.INGESTER: 2,
        Component.QUERIER: 2,
        Component.QUERY_FRONTEND: 2,
        Component.GATEWAY: 2,
        Component.INDEX_GATEWAY: 2,
    }),
    SizeTier.MEDIUM: _freeze({
        Component.DISTRIBUTOR: 2,
        Component.INGESTER: 3,
        Component.QUERIER: 3,
        Component.QUERY_FRONTEND: 2,
        Component.GATEWAY: 2,
        Component.INDEX_GATEWAY: 2,
    }),
})


def size_replicas(size: SizeTier) -> Mapping[Component, int]:
    """Return the read-only component -> default replicas mapping for a size"""
    return _REPLICAS_BY_SIZE[SizeTier.parse(size)]


def default_replicas(size: SizeTier, component: Component) -> int:
    """Return the default replica count of one component at the given size"""
    return size_replicas(size)[Component.parse(component)]
