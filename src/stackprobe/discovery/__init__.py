# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .engine import DiscoveryFlow, DiscoveryResult
from .stacks import find_stack_id
from .swagger import likely_action_paths, stack_routes

__all__ = ["DiscoveryFlow", "DiscoveryResult", "find_stack_id", "likely_action_paths", "stack_routes"]
