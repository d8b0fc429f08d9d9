#!/usr/bin/env python3
"""
Render the HorizontalPodAutoscaler manifests a stack document would produce.

Reads a stack document from disk and prints the manifests as YAML. Nothing
is applied to a cluster.
"""

import argparse
import sys
from typing import List, Optional

import yaml

import config
from horizontal_pod_autoscaler import build_horizontal_pod_autoscalers, render_manifests
from logging_utils import get_app_logger
from stack_spec import load_options

# Modules whose loggers report loading and synthesis details
LOGGED_MODULES = ("stack_spec", "horizontal_pod_autoscaler")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render stack HorizontalPodAutoscaler manifests as YAML")
    parser.add_argument("stack_file", help="Path to the stack YAML document")
    parser.add_argument("--namespace", default=None, help="Override the namespace from the document")
    parser.add_argument("--log-level", default=config.LOG_LEVEL.upper(), type=str.upper,
                        choices=LOG_LEVELS, help="Logging level")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    args = parser.parse_args(argv)

    # argparse does not check a default taken from LOG_LEVEL against the choices.
    if args.log_level not in LOG_LEVELS:
        sys.stderr.write(f"render_autoscalers: unknown log level {args.log_level!r}\n")
        return 1
    try:
        logger = get_app_logger("render_autoscalers", level=args.log_level, log_file=args.log_file)
        for module_name in LOGGED_MODULES:
            get_app_logger(module_name, level=args.log_level, log_file=args.log_file)
    except OSError as e:
        sys.stderr.write(f"render_autoscalers: cannot open log file: {e}\n")
        return 1

    try:
        opts = load_options(args.stack_file, namespace=args.namespace)
        descriptors = build_horizontal_pod_autoscalers(opts)
        manifests = render_manifests(descriptors)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to render autoscalers from {args.stack_file}: {e}")
        return 1

    if not descriptors:
        logger.info(f"Stack {opts.namespace}/{opts.name} has no autoscaling overrides")
        return 0

    sys.stdout.write(manifests)
    logger.info(f"Rendered {len(descriptors)} autoscaler(s) for {opts.namespace}/{opts.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
