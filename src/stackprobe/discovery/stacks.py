# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Lookup of an existing stack in a `GET /api/stacks` listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

# Portainer is inconsistent about field casing; the first listed casing wins.
NAME_KEYS = ("Name", "name")
ENDPOINT_ID_KEYS = ("EndpointId", "EndpointID")
ID_KEYS = ("Id", "ID")


def first_present(entry: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Value of the first key that is present and not null."""
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def same_endpoint(value: Any, endpoint_id: int) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        # JSON numbers compare by value, so 2.0 is endpoint 2.
        return value == endpoint_id
    if isinstance(value, str):
        text = value.strip()
        return text.lstrip("-").isdigit() and int(text) == endpoint_id
    return False


def find_stack_id(stacks: Any, name: str, endpoint_id: int) -> Any:
    """
    Return the id of the first stack named `name` on `endpoint_id`, or None.

    Entries that match but carry no id are skipped in favor of later matches.
    """
    if not isinstance(stacks, list):
        return None
    for entry in stacks:
        if not isinstance(entry, Mapping):
            continue
        if first_present(entry, NAME_KEYS) != name:
            continue
        if not same_endpoint(first_present(entry, ENDPOINT_ID_KEYS), endpoint_id):
            continue
        stack_id = first_present(entry, ID_KEYS)
        if stack_id is not None:
            return stack_id
    return None


__all__ = ["ENDPOINT_ID_KEYS", "ID_KEYS", "NAME_KEYS", "find_stack_id", "first_present", "same_endpoint"]
