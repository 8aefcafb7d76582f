# src/simfin_api/infrastructure/observability/metrics_simfin.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin client metrics.

Purpose:
    Provide Prometheus metrics for SimFin API calls:
      * Latency histogram by endpoint and outcome.
      * HTTP status distribution.
      * Error counter by reason (exception type).
      * Validation rejections by client operation.

Design:
    Functions return lazily created singletons so the collectors are
    registered exactly once per process, however many clients are built.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

_simfin_request_latency_seconds: Histogram | None = None
_simfin_http_status_total: Counter | None = None
_simfin_errors_total: Counter | None = None
_simfin_validation_rejections_total: Counter | None = None


def get_simfin_request_latency_seconds() -> Histogram:
    """Return (and lazily create) the SimFin request latency histogram."""
    global _simfin_request_latency_seconds
    if _simfin_request_latency_seconds is None:
        _simfin_request_latency_seconds = Histogram(
            "simfin_request_latency_seconds",
            "Latency of SimFin API calls in seconds.",
            ["endpoint", "outcome"],
        )
    return _simfin_request_latency_seconds


def get_simfin_http_status_total() -> Counter:
    """Return (and lazily create) the SimFin HTTP status counter."""
    global _simfin_http_status_total
    if _simfin_http_status_total is None:
        _simfin_http_status_total = Counter(
            "simfin_http_status_total",
            "SimFin HTTP responses by status code.",
            ["endpoint", "status"],
        )
    return _simfin_http_status_total


def get_simfin_errors_total() -> Counter:
    """Return (and lazily create) the SimFin error counter."""
    global _simfin_errors_total
    if _simfin_errors_total is None:
        _simfin_errors_total = Counter(
            "simfin_errors_total",
            "Total number of failed SimFin API calls.",
            ["endpoint", "reason"],
        )
    return _simfin_errors_total


def get_simfin_validation_rejections_total() -> Counter:
    """Return (and lazily create) the validation rejection counter."""
    global _simfin_validation_rejections_total
    if _simfin_validation_rejections_total is None:
        _simfin_validation_rejections_total = Counter(
            "simfin_validation_rejections_total",
            "SimFin calls rejected locally before any request was sent.",
            ["operation"],
        )
    return _simfin_validation_rejections_total
