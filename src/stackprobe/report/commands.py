# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Copy-paste shell commands for manual create/update/delete calls.

Pure templating: nothing here touches the network, and the same ProbeConfig always
renders the same text. The legacy create payload uses capitalized keys while the
update payload uses lower-case keys; both casings are kept as Portainer expects them.
"""

from __future__ import annotations

from ..config import ProbeConfig
from ..http.url import api_url

_MANUAL_COMMANDS = """\
# 0) Common headers
export PORTAINER_URL={base_url}
export PORTAINER_ENDPOINT_ID={endpoint_id}
export STACK_NAME={stack_name}
export STACK_FILE={stack_file}

# 1) List stacks
curl -sS -H "X-API-Key: $PORTAINER_API_KEY" "$PORTAINER_URL/api/stacks" | jq .

# 2) Create stack payload
#    Payload keys (commonly accepted): Name, StackFileContent, Env
payload_old_create=$(jq -n \\
  --arg name "$STACK_NAME" \\
  --arg content "$(cat "$STACK_FILE")" \\
  --argjson env '{{}}' \\
  '{{Name: $name, StackFileContent: $content, Env: ($env | to_entries | map({{name: .key, value: .value}}))}}'
)

# 3) NEW create (Portainer 2.33+ common)
curl -sS -i -X POST \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  -H "Content-Type: application/json" \\
  "$PORTAINER_URL/api/stacks/create/standalone/string?endpointId=$PORTAINER_ENDPOINT_ID" \\
  -d "$payload_old_create"

# 4) OLD create (legacy; may return 405 on newer Portainer)
curl -sS -i -X POST \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  -H "Content-Type: application/json" \\
  "$PORTAINER_URL/api/stacks?type=2&method=string&endpointId=$PORTAINER_ENDPOINT_ID" \\
  -d "$payload_old_create"

# 5) Common update payload
#    Endpoint: PUT /api/stacks/{{id}}?endpointId=...
#    Payload keys (note lowercase): stackFileContent, env, prune, pullImage
payload_update=$(jq -n \\
  --arg content "$(cat "$STACK_FILE")" \\
  --argjson env '{{}}' \\
  --argjson prune true \\
  '{{stackFileContent: $content, env: ($env | to_entries | map({{name: .key, value: .value}})), prune: $prune, pullImage: true}}'
)

# Replace STACK_ID with the one from step (1)
STACK_ID={example_stack_id}
curl -sS -i -X PUT \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  -H "Content-Type: application/json" \\
  "$PORTAINER_URL/api/stacks/$STACK_ID?endpointId=$PORTAINER_ENDPOINT_ID" \\
  -d "$payload_update"

# 6) Delete stack (DESTRUCTIVE)
#    Some Portainer setups require external=true (depends how the stack was created).
STACK_ID={example_stack_id}
curl -sS -i -X DELETE \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  "$PORTAINER_URL/api/stacks/$STACK_ID?endpointId=$PORTAINER_ENDPOINT_ID"

STACK_ID={example_stack_id}
curl -sS -i -X DELETE \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  "$PORTAINER_URL/api/stacks/$STACK_ID?endpointId=$PORTAINER_ENDPOINT_ID&external=true"

# 7) Other create candidates (varies by version)
#    Check swagger output above to confirm the exact route and params on YOUR instance.
#    These are the two most common alternatives:
#
#    (a) POST /api/stacks/create/standalone/string?endpointId=...
curl -sS -i -X POST \\
  -H "X-API-Key: $PORTAINER_API_KEY" \\
  -H "Content-Type: application/json" \\
  "$PORTAINER_URL/api/stacks/create/standalone/string?endpointId=$PORTAINER_ENDPOINT_ID" \\
  -d "$payload_old_create"

#    (b) POST /api/stacks/create/standalone/file?endpointId=...  (multipart), varies by version
#        Use swagger to confirm if this exists.
"""

EXAMPLE_STACK_ID = "123"


def shell_quote(value: object) -> str:
    """Single-quote a value for POSIX shells, always quoting (even safe strings)."""
    text = str(value)
    return "'" + text.replace("'", "'\\''") + "'"


def render_manual_commands(config: ProbeConfig) -> str:
    # STACK_ID stays a placeholder; step (1) lists the real one.
    return _MANUAL_COMMANDS.format(
        base_url=shell_quote(config.base_url),
        endpoint_id=shell_quote(config.endpoint_id),
        stack_name=shell_quote(config.stack_name),
        stack_file=shell_quote(config.stack_file),
        example_stack_id=EXAMPLE_STACK_ID,
    )


def stack_resource_url(config: ProbeConfig, *, external: bool = False) -> str:
    url = f"{api_url(config.base_url, f'stacks/{config.stack_id}')}?endpointId={config.endpoint_id}"
    return f"{url}&external=true" if external else url


def render_delete_examples(config: ProbeConfig) -> list[str]:
    """The usual DELETE calls for an existing stack, printed but never sent."""
    return [
        "If DELETE is allowed, the usual delete call is:",
        f'  curl -sS -i -X DELETE -H "X-API-Key: $PORTAINER_API_KEY" "{stack_resource_url(config)}"',
        "If that fails for an external stack, try:",
        f'  curl -sS -i -X DELETE -H "X-API-Key: $PORTAINER_API_KEY" "{stack_resource_url(config, external=True)}"',
    ]


__all__ = ["EXAMPLE_STACK_ID", "render_delete_examples", "render_manual_commands", "shell_quote", "stack_resource_url"]
