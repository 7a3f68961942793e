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
Models for `docker inspect` output and the network endpoint derived from it.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class InspectModel(BaseModel):
    """
    Base for the decode-side models. Field names follow the Docker JSON keys
    through aliases; keys we do not use are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PortBinding(InspectModel):
    """
    One host binding of a container port, e.g. {"HostIp": "0.0.0.0", "HostPort": "49154"}.
    """
    host_ip: str = Field(default="", alias="HostIp")
    host_port: str = Field(default="", alias="HostPort")


class NetworkSettings(InspectModel):
    ip_address: str = Field(default="", alias="IPAddress")
    # "<port>/<proto>" -> bindings, null when the port is exposed but not published
    ports: Dict[str, Optional[List[PortBinding]]] = Field(default_factory=dict, alias="Ports")

    @field_validator("ip_address", mode="before")
    @classmethod
    def _null_ip(cls, v):
        return "" if v is None else v

    @field_validator("ports", mode="before")
    @classmethod
    def _null_ports(cls, v):
        # A container without port configuration reports "Ports": null
        return {} if v is None else v


class ContainerState(InspectModel):
    paused: bool = Field(default=False, alias="Paused")
    running: bool = Field(default=False, alias="Running")

    @field_validator("paused", "running", mode="before")
    @classmethod
    def _null_flag(cls, v):
        return False if v is None else v


class InspectRecord(InspectModel):
    """
    A single element of the JSON array printed by `docker inspect <id>`.
    """
    network_settings: NetworkSettings = Field(default_factory=NetworkSettings, alias="NetworkSettings")
    state: ContainerState = Field(default_factory=ContainerState, alias="State")

    @field_validator("network_settings", mode="before")
    @classmethod
    def _null_network_settings(cls, v):
        return NetworkSettings() if v is None else v

    @field_validator("state", mode="before")
    @classmethod
    def _null_state(cls, v):
        return ContainerState() if v is None else v


class IPPort(BaseModel):
    """
    A published port of a container.

    Naming follows the inspect data rather than the usual host/container intuition:
    `public_port` is the port taken from the NetworkSettings.Ports key (the port
    the container listens on, e.g. 80 in "80/tcp"), while `private_port` is the
    HostPort the runtime bound it to on the host.
    """
    model_config = ConfigDict(frozen=True)

    public_port: int = Field(ge=0, le=65535)
    private_port: int = Field(ge=0, le=65535)
    proto: str


class ContainerEndpoint(BaseModel):
    """
    Snapshot of where a running container can be reached.
    """
    container_id: str
    ip_address: str = ""
    ports: List[IPPort] = []
