#!/usr/bin/env python3
"""
Object names and labels shared by stack workloads and their autoscalers.
"""

from typing import Dict

from components import Component

APP_NAME = "loki"
MANAGED_BY = "logstack-operator"


def component_name(component: Component, stack_name: str) -> str:
    """Name of the workload running a component of the given stack"""
    return f"{stack_name}-{Component.parse(component).value}"


def ingester_name(stack_name: str) -> str:
    return component_name(Component.INGESTER, stack_name)


def querier_name(stack_name: str) -> str:
    return component_name(Component.QUERIER, stack_name)


def horizontal_autoscaler_name(target_name: str) -> str:
    return f"{target_name}-hpa"


def common_labels(stack_name: str) -> Dict[str, str]:
    return {
        'app.kubernetes.io/name': APP_NAME,
        'app.kubernetes.io/instance': stack_name,
        'app.kubernetes.io/managed-by': MANAGED_BY,
    }


def component_labels(component: Component, stack_name: str) -> Dict[str, str]:
    """Labels selecting the pods of one component of a stack"""
    labels = common_labels(stack_name)
    labels['app.kubernetes.io/component'] = Component.parse(component).value
    return labels
