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
Unit tests for the external command runner.
"""
import sys
import pytest
from handover.errors import CommandError, ERR_CONTAINER_CMD
from handover.RUNNERS.command_runner import os_exec

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses POSIX utilities")


@posix_only
class TestOSExec:
    """Tests for os_exec."""

    def test_success(self):
        """Test stdout is returned untrimmed."""
        assert os_exec("echo", "hello,", "world!") == "hello, world!\n"

    def test_missing_program(self):
        """Test a program that cannot be started."""
        with pytest.raises(CommandError, match=ERR_CONTAINER_CMD) as exc_info:
            os_exec("echosdfjhsdfh", "one", "two")
        err = exc_info.value
        assert err.program == "echosdfjhsdfh"
        assert "args: one two" in str(err)

    def test_non_zero_exit(self):
        """Test stderr and exit status are included in the error."""
        with pytest.raises(CommandError) as exc_info:
            os_exec(sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)")
        err = exc_info.value
        assert "err: exit status 3" in str(err)
        assert str(err).endswith("stderr: boom")
        assert err.stderr == "boom"

    def test_false(self):
        """Test a plain failing command."""
        with pytest.raises(CommandError, match="exit status 1"):
            os_exec("false")

    def test_timeout(self):
        """Test a command that outlives its deadline."""
        with pytest.raises(CommandError, match="timed out"):
            os_exec("sleep", "5", timeout=0.2)
