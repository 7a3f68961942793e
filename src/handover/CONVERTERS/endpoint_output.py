# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Renders a resolved container endpoint for the handover caller.
"""
import json

import yaml

from ..MODELS.container import ContainerEndpoint
from ..UTILS.settings import OutputFormat


def to_json(endpoint: ContainerEndpoint) -> str:
    return json.dumps(endpoint.model_dump(), indent=2)


def to_yaml(endpoint: ContainerEndpoint) -> str:
    return yaml.safe_dump(endpoint.model_dump(), default_flow_style=False, sort_keys=False)


def to_text(endpoint: ContainerEndpoint) -> str:
    lines = [
        f"Container: {endpoint.container_id}",
        f"IP address: {endpoint.ip_address or '-'}",
        "Ports:",
    ]
    if not endpoint.ports:
        lines.append("  none published")
    for p in endpoint.ports:
        lines.append(f"  {p.public_port}/{p.proto} -> host {p.private_port}")
    return "\n".join(lines)


RENDERERS = {
    OutputFormat.TEXT: to_text,
    OutputFormat.JSON: to_json,
    OutputFormat.YAML: to_yaml,
}


def render(endpoint: ContainerEndpoint, fmt: OutputFormat) -> str:
    return RENDERERS[fmt](endpoint)
