"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


orientation_normalizations_total = Counter(
    "orientation_normalizations_total",
    "Total number of orientation normalization calls by outcome.",
    ["outcome"],
)

image_optimizations_total = Counter(
    "image_optimizations_total",
    "Total number of optimizer invocations by tool and status.",
    ["tool", "status"],
)
