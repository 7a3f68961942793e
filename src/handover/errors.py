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
Exceptions raised while resolving a container's state and network endpoint.
"""
from typing import Sequence

ERR_CONTAINER_CMD = "Error running external command"
ERR_ID_NOT_SET = "docker container id not set"
ERR_ID_NOT_FOUND = "docker container id not found"
ERR_ID_MULTIPLE_FOUND = "docker container id matched multiple results"
ERR_ID_NOT_RUNNING = "docker container id is not running"
ERR_MULTIPLE_PORTS_MAPPED = "docker container has a public port mapped to multiple private ports"
ERR_NON_PUBLISHED_PORT = "docker container has configured but unpublished or unexposed port"
ERR_CANT_PARSE_PORTS = "docker container id has exposed or published ports that cannot be parsed"


class HandoverError(Exception):
    """Base class for every error this package raises."""


class SettingsError(HandoverError):
    """A configuration value could not be interpreted."""


class CommandError(HandoverError):
    """
    An external command could not be started, timed out or exited non-zero.

    The message embeds the program, its arguments, the underlying error and
    whatever the command wrote to stderr.
    """

    def __init__(self, program: str, args: Sequence[str], reason: str, stderr: str = "", stdout: str = ""):
        self.program = program
        self.args_list = list(args)
        self.reason = reason
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(
            f"{ERR_CONTAINER_CMD}: {program}, args: {' '.join(self.args_list)}, "
            f"err: {reason}, stderr: {stderr}"
        )


class ContainerIDNotSetError(HandoverError):
    def __init__(self):
        super().__init__(ERR_ID_NOT_SET)


class ContainerNotRunningError(HandoverError):
    def __init__(self):
        super().__init__(ERR_ID_NOT_RUNNING)


class InspectDecodeError(HandoverError):
    """The inspect output is not a JSON array of inspection records."""


class CardinalityError(HandoverError):
    """The inspect output did not hold exactly one record."""

    reason = ""

    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(f"{self.reason}: {container_id}")


class ContainerNotFoundError(CardinalityError):
    reason = ERR_ID_NOT_FOUND


class MultipleContainersError(CardinalityError):
    reason = ERR_ID_MULTIPLE_FOUND


class PortError(HandoverError):
    """Base class for problems with a single entry of NetworkSettings.Ports."""

    reason = ""

    def __init__(self, specifier: str):
        self.specifier = specifier
        super().__init__(self._format(specifier))

    def _format(self, specifier: str) -> str:
        return f"{self.reason} for public port: {specifier}"


class PortSpecError(PortError):
    reason = ERR_CANT_PARSE_PORTS

    def _format(self, specifier: str) -> str:
        return f"{self.reason}: {specifier}"


class UnpublishedPortError(PortError):
    """
    The port is declared by the image but has no host binding.

    Inspection skips these entries instead of failing.
    """

    reason = ERR_NON_PUBLISHED_PORT


class MultiplePortsMappedError(PortError):
    reason = ERR_MULTIPLE_PORTS_MAPPED


class PortNumberError(HandoverError, ValueError):
    """A port number is not an unsigned base-10 integer that fits in 16 bits."""

    def __init__(self, text: str, detail: str):
        self.text = text
        super().__init__(f"invalid port number {text!r}: {detail}")
