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
Unit tests for parsing NetworkSettings.Ports entries.
"""
import pytest
from handover.errors import (
    MultiplePortsMappedError,
    PortNumberError,
    PortSpecError,
    UnpublishedPortError,
    ERR_CANT_PARSE_PORTS,
    ERR_MULTIPLE_PORTS_MAPPED,
    ERR_NON_PUBLISHED_PORT,
)
from handover.INSPECTORS.docker_inspector import parse_inspect_ports, parse_port_number
from handover.MODELS.container import IPPort, PortBinding


class TestParsePortNumber:
    """Tests for parse_port_number."""

    @pytest.mark.parametrize("text,expected", [("0", 0), ("80", 80), ("080", 80), ("65535", 65535)])
    def test_valid(self, text, expected):
        assert parse_port_number(text) == expected

    @pytest.mark.parametrize("text", ["", "-1", "+80", " 80", "80 ", "1_000", "8o", "65536", "99999999999", "٨"])
    def test_invalid(self, text):
        with pytest.raises(PortNumberError):
            parse_port_number(text)

    def test_is_value_error(self):
        """Test port number errors can be handled as ValueError."""
        with pytest.raises(ValueError):
            parse_port_number("65537")


class TestParseInspectPorts:
    """Tests for parse_inspect_ports."""

    def test_published(self):
        """Test a port with a single host binding."""
        ip_port = parse_inspect_ports("80/tcp", [PortBinding(host_ip="0.0.0.0", host_port="49154")])
        assert ip_port == IPPort(public_port=80, private_port=49154, proto="tcp")

    def test_proto_is_verbatim(self):
        """Test the protocol is copied as-is."""
        ip_port = parse_inspect_ports("53/udp", [PortBinding(host_port="53")])
        assert ip_port.proto == "udp"

    @pytest.mark.parametrize("public", ["", "80", "40/tcp/udp", "/tcp", "80/", "/"])
    def test_invalid_public(self, public):
        """Test port keys that are not exactly <port>/<proto>."""
        with pytest.raises(PortSpecError, match=ERR_CANT_PARSE_PORTS) as exc_info:
            parse_inspect_ports(public, [])
        assert exc_info.value.specifier == public
        assert str(exc_info.value).endswith(f": {public}")

    @pytest.mark.parametrize("public", ["65537/tcp", "-1/tcp", "abc/tcp"])
    def test_invalid_public_number(self, public):
        """Test out of range public ports fail before bindings are checked."""
        with pytest.raises(PortNumberError):
            parse_inspect_ports(public, [])

    @pytest.mark.parametrize("private", [None, []])
    def test_unpublished(self, private):
        """Test ports without host bindings."""
        with pytest.raises(UnpublishedPortError, match=ERR_NON_PUBLISHED_PORT) as exc_info:
            parse_inspect_ports("80/tcp", private)
        assert "80/tcp" in str(exc_info.value)

    def test_multi_mapped(self):
        """Test a public port bound to several host ports."""
        bindings = [PortBinding(host_port="4567"), PortBinding(host_port="1234")]
        with pytest.raises(MultiplePortsMappedError, match=ERR_MULTIPLE_PORTS_MAPPED) as exc_info:
            parse_inspect_ports("81/tcp", bindings)
        assert "81/tcp" in str(exc_info.value)

    @pytest.mark.parametrize("host_port", ["65537", "-1", ""])
    def test_invalid_private(self, host_port):
        """Test host ports that are not 16-bit numbers."""
        with pytest.raises(PortNumberError):
            parse_inspect_ports("82/tcp", [PortBinding(host_port=host_port)])

    def test_bindings_from_json_aliases(self):
        """Test bindings decoded with their Docker key names."""
        binding = PortBinding.model_validate({"HostIp": "::", "HostPort": "8443"})
        assert parse_inspect_ports("443/tcp", [binding]).private_port == 8443
