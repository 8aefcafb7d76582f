# src/simfin_api/domain/exceptions/simfin.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin Domain Exceptions.

Synopsis:
    Errors raised locally by the SimFin client before any request leaves the
    process. Transport failures (network errors, non-2xx statuses, malformed
    JSON) are not represented here: they surface as the HTTP client's own
    exceptions.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any

from simfin_api.domain.exceptions.base import DomainError


class SimFinValidationError(DomainError):
    """Caller-supplied parameters violate a declared constraint.

    ``details["violations"]`` holds one entry per offending field with keys
    ``field``, ``message`` and ``type``.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "SIMFIN_VALIDATION_ERROR"

    @property
    def violations(self) -> list[dict[str, Any]]:
        """Return the list of field violations."""
        return list(self.details.get("violations", []))

    @property
    def fields(self) -> list[str]:
        """Return the names of the offending fields, in reported order."""
        return [v["field"] for v in self.violations]


class SimFinConfigurationError(DomainError):
    """The client cannot be built from the supplied configuration.

    Raised when no access token is passed and none is configured in the
    environment.

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "SIMFIN_CONFIGURATION_ERROR"
