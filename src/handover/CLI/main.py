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
Command Line Interface for cxn-handover.
"""
import functools
import logging
import sys

import click

from ..CONVERTERS.endpoint_output import render
from ..errors import HandoverError
from ..INSPECTORS.docker_inspector import resolve_container
from ..RUNNERS.command_runner import os_exec
from ..UTILS.log_setup import NOTICE, configure_logging
from ..UTILS.settings import OutputFormat, load_settings

logger = logging.getLogger(__name__)


@click.command()
@click.option('--id', '-i', 'container_id', default=None, help='Container ID')
@click.option('--verbose', '-v', is_flag=True, help='Be verbose')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None, help='Seconds to wait for the container runtime')
@click.option('--runtime', default=None, help='Container runtime CLI (default: docker)')
@click.option('--output', '-o', type=click.Choice([f.value for f in OutputFormat]), default=None,
              help='Endpoint output format')
@click.option('--env-file', default='.env', help='dotenv file with HANDOVER_* defaults')
def cli(container_id, verbose, timeout, runtime, output, env_file):
    """
    Checks that a container is valid and running, then prints where to reach it:
    its internal IP address and published ports.
    """
    configure_logging(verbose)

    try:
        settings = load_settings(env_file=env_file)
    except HandoverError as e:
        fatal(e)

    if container_id is None:
        container_id = settings.container_id
    fmt = OutputFormat(output) if output else settings.output
    runner = functools.partial(os_exec, timeout=timeout if timeout is not None else settings.timeout)

    try:
        endpoint = resolve_container(container_id, runner=runner, program=runtime or settings.runtime)
    except HandoverError as e:
        fatal(e)

    logger.log(NOTICE, "Container %s is running at %s", container_id, endpoint.ip_address or "-")
    for ip_port in endpoint.ports:
        logger.debug("Published %d/%s on host port %d", ip_port.public_port, ip_port.proto, ip_port.private_port)

    click.echo(render(endpoint, fmt))


def fatal(err: Exception):
    logger.critical("%s", err)
    sys.exit(1)


def main():
    """
    Main entry point for the CLI.
    """
    cli()


if __name__ == '__main__':
    main()
