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
Settings read from the environment and an optional .env file.
"""
import os
from enum import Enum
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError

from ..errors import SettingsError

ENV_PREFIX = "HANDOVER_"


class OutputFormat(str, Enum):
    """
    How the resolved endpoint is printed.
    """
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


class Settings(BaseModel):
    """
    Defaults for the CLI. Command line options take precedence.
    """
    container_id: str = ""
    runtime: str = Field(default="docker", min_length=1)
    # Seconds to wait for the runtime CLI, None waits forever
    timeout: Optional[float] = Field(default=None, gt=0)
    output: OutputFormat = OutputFormat.TEXT


def load_settings(context: Optional[Dict[str, str]] = None, env_file: Optional[str] = None) -> Settings:
    """
    Builds settings from HANDOVER_* variables.

    Values in `context` win over values in `env_file`.

    :param context: Variables to read. Defaults to the process environment.
    :param env_file: Path to a dotenv file, read if it exists.
    :return: The loaded settings.
    :raises SettingsError: If a value cannot be converted.
    """
    values: Dict[str, str] = {}
    if env_file and os.path.exists(env_file):
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(context if context is not None else dict(os.environ))

    fields = {}
    for name in Settings.model_fields:
        raw = values.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is None or raw == "":
            continue
        fields[name] = raw.lower() if name == "output" else raw

    try:
        return Settings(**fields)
    except ValidationError as e:
        raise SettingsError(f"invalid {ENV_PREFIX}* settings: {e}") from e
