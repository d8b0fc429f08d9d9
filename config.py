#!/usr/bin/env python3
"""
Central runtime configuration defaults for the stack autoscaling synthesizer.
"""

import os

# Scale-up behavior
HPA_SCALE_UP_PERIOD_SECONDS = int(os.getenv("HPA_SCALE_UP_PERIOD_SECONDS", "15"))
HPA_SCALE_UP_STABILIZATION_WINDOW_SECONDS = int(os.getenv("HPA_SCALE_UP_STABILIZATION_WINDOW_SECONDS", "0"))

# Scale-down behavior
HPA_SCALE_DOWN_PERIOD_SECONDS = int(os.getenv("HPA_SCALE_DOWN_PERIOD_SECONDS", "60"))
HPA_SCALE_DOWN_STABILIZATION_WINDOW_SECONDS = int(os.getenv("HPA_SCALE_DOWN_STABILIZATION_WINDOW_SECONDS", "300"))

# Metric target and replica bounds
HPA_MEMORY_TARGET_UTILIZATION = int(os.getenv("HPA_MEMORY_TARGET_UTILIZATION", "80"))
HPA_MAX_REPLICAS_MULTIPLIER = int(os.getenv("HPA_MAX_REPLICAS_MULTIPLIER", "4"))

# Rendering and logging
DEFAULT_NAMESPACE = os.getenv("DEFAULT_NAMESPACE", "default")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
