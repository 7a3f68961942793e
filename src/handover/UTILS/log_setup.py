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
Console logging for the CLI.
"""
import logging
import sys
from typing import Optional, TextIO

import click

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

PREFIX_FORMAT = "%(asctime)s.%(msecs)03d %(funcName)s:"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    logging.DEBUG: "blue",
    logging.INFO: "cyan",
    NOTICE: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "magenta",
}


class ColorFormatter(logging.Formatter):
    """
    Colours the timestamp and function name according to the record's level.
    """

    def __init__(self, color: bool = True):
        super().__init__(PREFIX_FORMAT + " %(message)s", DATE_FORMAT)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.color:
            return line
        prefix = PREFIX_FORMAT % record.__dict__
        return click.style(prefix, fg=_LEVEL_COLORS.get(record.levelno)) + line[len(prefix):]


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Installs a single console handler on the package logger.

    Args:
        verbose (bool): Log DEBUG messages as well.
        stream (Optional[TextIO]): Where to write. Defaults to stderr.

    Returns:
        logging.Logger: The configured package logger.
    """
    stream = stream or sys.stderr
    logger = logging.getLogger("handover")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(color=stream.isatty()))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
