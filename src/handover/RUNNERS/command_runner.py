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
Execution of external commands whose standard output is needed as text.
"""
import logging
import subprocess
from typing import Callable, Optional

from ..errors import CommandError

logger = logging.getLogger(__name__)

# Anything called as runner(prog, *args) that returns stdout or raises CommandError.
# Inspectors take one of these so tests can substitute canned output.
CommandRunner = Callable[..., str]


def os_exec(prog: str, *args: str, timeout: Optional[float] = None) -> str:
    """
    Runs a program and returns its standard output exactly as produced.

    Args:
        prog (str): Program to execute, looked up on PATH.
        *args (str): Arguments passed to the program.
        timeout (Optional[float]): Seconds to wait before giving up. None waits forever.

    Returns:
        str: Captured stdout, including any trailing newline.

    Raises:
        CommandError: If the program cannot be started, times out or exits non-zero.
    """
    command = [prog, *args]
    logger.debug("Running command: %s", " ".join(command))

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
            check=False,
            # Avoid shell=True for security reasons (CWE-78)
            shell=False,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(prog, args, str(e), _as_text(e.stderr), _as_text(e.stdout)) from e
    except OSError as e:
        raise CommandError(prog, args, str(e)) from e

    if result.returncode != 0:
        raise CommandError(prog, args, f"exit status {result.returncode}", result.stderr, result.stdout)

    return result.stdout


def _as_text(data) -> str:
    # TimeoutExpired carries bytes even when text=True was requested
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
