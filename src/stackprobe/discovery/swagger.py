# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Stack-related route extraction from a Portainer swagger/OpenAPI document."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

SWAGGER_JSON_PATH = "/api/swagger.json"
# JSON first; the YAML variants are only reported, never parsed.
SWAGGER_PATHS: tuple[str, ...] = (SWAGGER_JSON_PATH, "/api/swagger.yaml", "/api/swagger.yml")

STACK_PATH_RE = re.compile(r"(^|/)stacks($|/|\?)")
ACTION_KEYWORD_RE = re.compile(r"create|update|standalone|compose|swarm|git", re.IGNORECASE)
STACK_SCHEMA_RE = re.compile(r"stack|compose|swarm", re.IGNORECASE)

HTTP_METHODS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

SCHEMA_SEARCH_HINT = (
    "  jq '.components.schemas | keys[] | select(test(\"stack|compose|swarm\"; \"i\"))'"
)


@dataclass(frozen=True)
class StackRoute:
    path: str
    methods: tuple[str, ...]


def is_json_document_path(path: str) -> bool:
    return path.lower().endswith(".json")


def parse_document(text: str | None) -> dict[str, Any] | None:
    """Parse a swagger body; None when it is not a JSON object."""
    try:
        parsed = json.loads(text or "")
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _paths(document: Mapping[str, Any]) -> Mapping[str, Any]:
    paths = document.get("paths")
    return paths if isinstance(paths, Mapping) else {}


def stack_routes(document: Mapping[str, Any]) -> list[StackRoute]:
    """Documented paths on a `stacks` segment boundary, in document order, with sorted methods."""
    routes: list[StackRoute] = []
    for path, item in _paths(document).items():
        if not STACK_PATH_RE.search(str(path)):
            continue
        methods: Iterable[str] = item.keys() if isinstance(item, Mapping) else ()
        routes.append(StackRoute(str(path), tuple(sorted(m for m in methods if str(m).lower() in HTTP_METHODS))))
    return routes


def likely_action_paths(paths: Iterable[str]) -> list[str]:
    """Sorted subset of stack paths that look like create/update routes."""
    return sorted(path for path in paths if ACTION_KEYWORD_RE.search(path))


def stack_schema_names(document: Mapping[str, Any]) -> list[str]:
    """Payload model names mentioning stacks (OpenAPI 3 components, else Swagger 2 definitions)."""
    components = document.get("components")
    schemas = components.get("schemas") if isinstance(components, Mapping) else None
    if not isinstance(schemas, Mapping):
        schemas = document.get("definitions")
    if not isinstance(schemas, Mapping):
        return []
    return sorted(str(name) for name in schemas if STACK_SCHEMA_RE.search(str(name)))


__all__ = [
    "ACTION_KEYWORD_RE",
    "SCHEMA_SEARCH_HINT",
    "STACK_PATH_RE",
    "SWAGGER_JSON_PATH",
    "SWAGGER_PATHS",
    "StackRoute",
    "is_json_document_path",
    "likely_action_paths",
    "parse_document",
    "stack_routes",
    "stack_schema_names",
]
