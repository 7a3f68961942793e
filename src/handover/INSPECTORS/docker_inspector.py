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
Resolution of a Docker container's state, IP address and published ports
from the output of `docker inspect`.
"""
import logging
import re
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..errors import (
    ContainerIDNotSetError,
    ContainerNotFoundError,
    ContainerNotRunningError,
    InspectDecodeError,
    MultipleContainersError,
    MultiplePortsMappedError,
    PortNumberError,
    PortSpecError,
    UnpublishedPortError,
)
from ..MODELS.container import ContainerEndpoint, InspectRecord, IPPort, PortBinding
from ..RUNNERS.command_runner import CommandRunner, os_exec

logger = logging.getLogger(__name__)

MAX_PORT = 65535

_DIGITS_RE = re.compile(r"[0-9]+")
# A bare null decodes like an empty array, a null element like an empty record
_RECORDS = TypeAdapter(Optional[List[Optional[InspectRecord]]])


def is_operationally_running(running: bool, paused: bool) -> bool:
    """
    A container counts as running only when it is started and not paused.
    """
    return running and not paused


def parse_port_number(text: str) -> int:
    """
    Parses an unsigned base-10 port number that must fit in 16 bits.

    :param text: The port as found in the inspect output, e.g. "8080".
    :return: The port number.
    :raises PortNumberError: If the text is not plain ASCII digits or exceeds 65535.
    """
    if not _DIGITS_RE.fullmatch(text):
        raise PortNumberError(text, "invalid syntax")
    value = int(text)
    if value > MAX_PORT:
        raise PortNumberError(text, "value out of range")
    return value


def parse_inspect_ports(public: str, private: Optional[Sequence[PortBinding]]) -> IPPort:
    """
    Builds the port mapping for one entry of NetworkSettings.Ports.

    :param public: The port key, in the form "<port>/<proto>", e.g. "80/tcp".
    :param private: Host bindings for that key. None or empty means the port is
        exposed but not published.
    :return: The parsed mapping.
    :raises PortSpecError: If the key is not exactly "<port>/<proto>".
    :raises PortNumberError: If either port number is invalid.
    :raises UnpublishedPortError: If there are no host bindings.
    :raises MultiplePortsMappedError: If there is more than one host binding.
    """
    parts = public.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise PortSpecError(public)
    port, proto = parts

    public_port = parse_port_number(port)

    if not private:
        raise UnpublishedPortError(public)
    if len(private) > 1:
        raise MultiplePortsMappedError(public)

    private_port = parse_port_number(private[0].host_port)

    return IPPort(public_port=public_port, private_port=private_port, proto=proto)


class DockerInspector:
    """
    Inspects a single container through the Docker CLI.

    State is only meaningful after a successful `inspect()`. If `inspect()` raises,
    the port list may be partially filled and the instance should be discarded.
    """

    def __init__(self, container_id: str, runner: CommandRunner = os_exec, program: str = "docker"):
        """
        :param container_id: Container name or ID as accepted by `docker inspect`.
        :param runner: Callable used to run the inspect command.
        :param program: Container runtime CLI to invoke.
        """
        self._container_id = container_id
        self._runner = runner
        self._program = program

        self._running = False
        self._paused = False
        self._ip_address = ""
        self._ip_ports: List[IPPort] = []

    @property
    def container_id(self) -> str:
        return self._container_id

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def ip_address(self) -> str:
        return self._ip_address

    @property
    def ip_ports(self) -> List[IPPort]:
        return list(self._ip_ports)

    def validate(self):
        """
        Checks the container ID before it is used. No command is run.

        :raises ContainerIDNotSetError: If the ID is empty.
        """
        if self._container_id == "":
            raise ContainerIDNotSetError()

    def check_running(self):
        """
        :raises ContainerNotRunningError: If the container is stopped, paused, or both.
        """
        if not is_operationally_running(self._running, self._paused):
            raise ContainerNotRunningError()

    def inspect(self):
        """
        Runs `docker inspect` and loads the container's state, IP address and
        published ports. Ports that are exposed but not published are skipped.

        :raises CommandError: If the inspect command fails.
        :raises InspectDecodeError: If the output is not an array of inspect records.
        :raises ContainerNotFoundError: If no container matched the ID.
        :raises MultipleContainersError: If the ID matched more than one object.
        :raises PortError: If a published port cannot be parsed.
        :raises PortNumberError: If a port number is invalid.
        """
        stdout = self._runner(self._program, "inspect", self._container_id)
        records = self._decode(stdout)

        if len(records) == 0:
            raise ContainerNotFoundError(self._container_id)
        if len(records) > 1:
            raise MultipleContainersError(self._container_id)

        record = records[0]
        self._paused = record.state.paused
        self._running = record.state.running
        self._ip_address = record.network_settings.ip_address
        self._ip_ports = []

        for public, private in record.network_settings.ports.items():
            try:
                ip_port = parse_inspect_ports(public, private)
            except UnpublishedPortError:
                logger.debug("Skipping unpublished port %s of %s", public, self._container_id)
                continue
            self._ip_ports.append(ip_port)

        logger.debug(
            "Inspected %s: running=%s paused=%s ip=%r ports=%d",
            self._container_id, self._running, self._paused, self._ip_address, len(self._ip_ports),
        )

    def endpoint(self) -> ContainerEndpoint:
        """
        Returns the network data loaded by the last `inspect()`.
        """
        return ContainerEndpoint(
            container_id=self._container_id,
            ip_address=self._ip_address,
            ports=list(self._ip_ports),
        )

    def _decode(self, stdout: str) -> List[InspectRecord]:
        # No output at all is an empty result, not a malformed one
        if not stdout.strip():
            return []
        try:
            records = _RECORDS.validate_json(stdout)
        except ValidationError as e:
            raise InspectDecodeError(
                f"cannot decode docker inspect output for {self._container_id}: {e}"
            ) from e
        return [record if record is not None else InspectRecord() for record in records or []]


def resolve_container(container_id: str,
                      runner: CommandRunner = os_exec,
                      program: str = "docker") -> ContainerEndpoint:
    """
    Validates, inspects and checks a container in one go.

    Args:
        container_id (str): Container name or ID.
        runner (CommandRunner): Callable used to run the inspect command.
        program (str): Container runtime CLI to invoke.

    Returns:
        ContainerEndpoint: Where the running container can be reached.
    """
    inspector = DockerInspector(container_id, runner=runner, program=program)
    inspector.validate()
    inspector.inspect()
    inspector.check_running()
    return inspector.endpoint()
