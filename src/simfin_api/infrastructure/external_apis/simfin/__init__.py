# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin external API package.

Purpose:
    Group SimFin-related infrastructure modules:

    * settings: Pydantic settings for the SimFin client.
    * routes: Request descriptors for each SimFin endpoint.
    * client: Async validate-then-fetch client for the SimFin v1 API.
    * types: Typed response fragments for SimFin endpoints.
"""

from __future__ import annotations
