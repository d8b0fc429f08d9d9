#!/usr/bin/env python3
"""
Stack Horizontal Pod Autoscalers
================================

Synthesizes HorizontalPodAutoscaler descriptors for the stack components
that scale horizontally (the ingester StatefulSet and the querier
Deployment).

A descriptor is only built for a component whose template carries an
autoscaling override. Replica bounds follow the size multiplier policy:
the component's effective replica count is the floor and
HPA_MAX_REPLICAS_MULTIPLIER times that count is the ceiling.

Everything here is a pure function of its input. Descriptors are frozen
and a fresh list is returned on every call.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

import config
from components import AUTOSCALED_COMPONENTS, Component, workload_kind
from names import component_labels, component_name, horizontal_autoscaler_name
from stack_spec import AutoscalingSpec, Options

logger = logging.getLogger(__name__)

HPA_API_VERSION = "autoscaling/v2"
HPA_KIND = "HorizontalPodAutoscaler"
WORKLOAD_API_VERSION = "apps/v1"
MEMORY_RESOURCE = "memory"


class ReplicaBoundsError(ValueError):
    """Raised when replica bounds are negative or inverted"""


class InvalidScalingRuleError(ValueError):
    """Raised for scaling steps or periods that are not positive integers"""


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ScalingPolicyType(str, Enum):
    PERCENT = "Percent"
    PODS = "Pods"


class SelectPolicy(str, Enum):
    """Which step wins when several rules apply in the same period"""
    MAX = "Max"  # most aggressive
    MIN = "Min"  # least aggressive


@dataclass(frozen=True)
class TargetRef:
    kind: str
    name: str
    api_version: str = WORKLOAD_API_VERSION


@dataclass(frozen=True)
class ReplicaBounds:
    min: int
    max: int

    def __post_init__(self):
        if self.min < 0 or self.max < 0:
            raise ReplicaBoundsError(f"Replica bounds must be non-negative: min={self.min}, max={self.max}")
        if self.min > self.max:
            raise ReplicaBoundsError(f"minReplicas ({self.min}) exceeds maxReplicas ({self.max})")

    @classmethod
    def from_replicas(cls, replicas: int,
                      multiplier: int = config.HPA_MAX_REPLICAS_MULTIPLIER) -> "ReplicaBounds":
        return cls(min=replicas, max=replicas * multiplier)


@dataclass(frozen=True)
class ScalingStepRule:
    type: ScalingPolicyType
    value: int
    period_seconds: int

    def __post_init__(self):
        if not _is_positive_int(self.value):
            raise InvalidScalingRuleError(f"{self.type.value} scaling step must be a positive integer, got {self.value!r}")
        if not _is_positive_int(self.period_seconds):
            raise InvalidScalingRuleError(f"Scaling period must be a positive integer, got {self.period_seconds!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'value': self.value,
            'periodSeconds': self.period_seconds,
        }


@dataclass(frozen=True)
class ScalingRules:
    policies: Tuple[ScalingStepRule, ...]
    select_policy: SelectPolicy
    stabilization_window_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stabilizationWindowSeconds': self.stabilization_window_seconds,
            'selectPolicy': self.select_policy.value,
            'policies': [policy.to_dict() for policy in self.policies],
        }


@dataclass(frozen=True)
class MetricTarget:
    utilization_percent: int
    resource: str = MEMORY_RESOURCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'Resource',
            'resource': {
                'name': self.resource,
                'target': {
                    'type': 'Utilization',
                    'averageUtilization': self.utilization_percent,
                },
            },
        }


@dataclass(frozen=True)
class ScalingPolicyDescriptor:
    """A fully resolved HorizontalPodAutoscaler for one stack component"""
    name: str
    namespace: str
    labels: Tuple[Tuple[str, str], ...]
    target_ref: TargetRef
    bounds: ReplicaBounds
    scale_up: ScalingRules
    scale_down: ScalingRules
    metric_target: MetricTarget

    @property
    def label_map(self) -> Dict[str, str]:
        return dict(self.labels)

    def to_manifest(self) -> Dict[str, Any]:
        """Render as an autoscaling/v2 HorizontalPodAutoscaler object

        The API server rejects maxReplicas below 1, so a component scaled to
        zero replicas cannot be rendered and raises ReplicaBoundsError.
        """
        if self.bounds.max < 1:
            raise ReplicaBoundsError(f"{self.name}: maxReplicas must be at least 1 to render, got {self.bounds.max}")
        return {
            'apiVersion': HPA_API_VERSION,
            'kind': HPA_KIND,
            'metadata': {
                'name': self.name,
                'namespace': self.namespace,
                'labels': self.label_map,
            },
            'spec': {
                'scaleTargetRef': {
                    'apiVersion': self.target_ref.api_version,
                    'kind': self.target_ref.kind,
                    'name': self.target_ref.name,
                },
                'minReplicas': self.bounds.min,
                'maxReplicas': self.bounds.max,
                'metrics': [self.metric_target.to_dict()],
                'behavior': {
                    'scaleDown': self.scale_down.to_dict(),
                    'scaleUp': self.scale_up.to_dict(),
                },
            },
        }


@dataclass(frozen=True)
class PolicyBuildRequest:
    """All inputs of build_policy, resolved ahead of time"""
    name: str
    namespace: str
    labels: Tuple[Tuple[str, str], ...]
    target_ref: TargetRef
    bounds: ReplicaBounds
    autoscaling: AutoscalingSpec


def resolve_target(component: Component, stack_name: str) -> TargetRef:
    """Resolve the workload a component's autoscaler points at"""
    component = Component.parse(component)
    return TargetRef(kind=workload_kind(component), name=component_name(component, stack_name))


def build_policy(request: PolicyBuildRequest) -> ScalingPolicyDescriptor:
    """Build the descriptor for one component from a resolved request"""
    autoscaling = request.autoscaling

    scale_down = ScalingRules(
        policies=(
            ScalingStepRule(
                type=ScalingPolicyType.PERCENT,
                value=autoscaling.scale_down_percentage,
                period_seconds=config.HPA_SCALE_DOWN_PERIOD_SECONDS,
            ),
        ),
        select_policy=SelectPolicy.MIN,
        stabilization_window_seconds=config.HPA_SCALE_DOWN_STABILIZATION_WINDOW_SECONDS,
    )
    scale_up = ScalingRules(
        policies=(
            ScalingStepRule(
                type=ScalingPolicyType.PERCENT,
                value=autoscaling.scale_up_percentage,
                period_seconds=config.HPA_SCALE_UP_PERIOD_SECONDS,
            ),
        ),
        select_policy=SelectPolicy.MAX,
        stabilization_window_seconds=config.HPA_SCALE_UP_STABILIZATION_WINDOW_SECONDS,
    )

    return ScalingPolicyDescriptor(
        name=request.name,
        namespace=request.namespace,
        labels=request.labels,
        target_ref=request.target_ref,
        bounds=request.bounds,
        scale_up=scale_up,
        scale_down=scale_down,
        metric_target=MetricTarget(utilization_percent=config.HPA_MEMORY_TARGET_UTILIZATION),
    )


def new_horizontal_pod_autoscaler(opts: Options, component: Component) -> Optional[ScalingPolicyDescriptor]:
    """Build the autoscaler for one component, or None when it has no override"""
    component = Component.parse(component)
    autoscaling = opts.autoscaling_for(component)
    if autoscaling is None:
        logger.debug(f"No autoscaling override for {component.value} in {opts.namespace}/{opts.name}, skipping")
        return None

    target_ref = resolve_target(component, opts.name)
    request = PolicyBuildRequest(
        name=horizontal_autoscaler_name(target_ref.name),
        namespace=opts.namespace,
        labels=tuple(sorted(component_labels(component, opts.name).items())),
        target_ref=target_ref,
        bounds=ReplicaBounds.from_replicas(opts.replicas_for(component)),
        autoscaling=autoscaling,
    )
    return build_policy(request)


def new_ingester_horizontal_pod_autoscaler(opts: Options) -> Optional[ScalingPolicyDescriptor]:
    return new_horizontal_pod_autoscaler(opts, Component.INGESTER)


def new_querier_horizontal_pod_autoscaler(opts: Options) -> Optional[ScalingPolicyDescriptor]:
    return new_horizontal_pod_autoscaler(opts, Component.QUERIER)


def build_horizontal_pod_autoscalers(opts: Options) -> List[ScalingPolicyDescriptor]:
    """Build autoscalers for every horizontally scalable component with an override"""
    descriptors = []
    for component in AUTOSCALED_COMPONENTS:
        descriptor = new_horizontal_pod_autoscaler(opts, component)
        if descriptor is not None:
            descriptors.append(descriptor)

    logger.debug(f"Built {len(descriptors)} autoscaler(s) for {opts.namespace}/{opts.name}: "
                 f"{[d.name for d in descriptors]}")
    return descriptors


def render_manifests(descriptors: Iterable[ScalingPolicyDescriptor]) -> str:
    """Dump descriptors as a multi-document YAML stream"""
    return yaml.safe_dump_all(
        [descriptor.to_manifest() for descriptor in descriptors],
        default_flow_style=False,
        sort_keys=False,
    )
