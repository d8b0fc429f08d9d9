#!/usr/bin/env python3
"""
Log Stack Components
====================

The closed set of components a log stack is made of, and the workload kind
each one is deployed as.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any


class UnknownComponentError(ValueError):
    """Raised for a component identity outside the known set"""


class Component(str, Enum):
    """Stack component identity; the value doubles as its label and name suffix."""
    INGESTER = "ingester"
    QUERIER = "querier"
    DISTRIBUTOR = "distributor"
    QUERY_FRONTEND = "query-frontend"
    GATEWAY = "gateway"
    INDEX_GATEWAY = "index-gateway"

    @classmethod
    def parse(cls, value: Any) -> "Component":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownComponentError(f"Unknown stack component: {value!r}") from None


STATEFUL_SET = "StatefulSet"
DEPLOYMENT = "Deployment"

# Only the ingester keeps on-disk state (its WAL) and runs as a StatefulSet.
WORKLOAD_KINDS = MappingProxyType({
    Component.INGESTER: STATEFUL_SET,
    Component.QUERIER: DEPLOYMENT,
    Component.DISTRIBUTOR: DEPLOYMENT,
    Component.QUERY_FRONTEND: DEPLOYMENT,
    Component.GATEWAY: DEPLOYMENT,
    Component.INDEX_GATEWAY: DEPLOYMENT,
})

# Declaration order is the order autoscalers are emitted in.
AUTOSCALED_COMPONENTS = (
    Component.INGESTER,
    Component.QUERIER,
)


def workload_kind(component: Component) -> str:
    """Return the workload kind (StatefulSet or Deployment) backing a component"""
    return WORKLOAD_KINDS[Component.parse(component)]
