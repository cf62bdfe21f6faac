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
Logging setup for runconf.

Usage:
    from ..UTILS.log import get_logger
    logger = get_logger(__name__)
    logger.debug("Routing volume token %s", token)

Debug output is enabled with RUNCONF_DEBUG=1 or the CLI --debug flag.
"""
import logging
import os
import sys
from typing import Dict

ROOT_LOGGER = "runconf"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, logging.Logger] = {}
_initialized = False


def _get_log_level() -> int:
    """
    Determines the log level from the environment.
    """
    if os.environ.get("RUNCONF_DEBUG", "").lower() in ("1", "true", "yes"):
        return logging.DEBUG
    return logging.WARNING


def _init_logging() -> None:
    """
    Attaches a single stderr handler to the runconf root logger.
    """
    global _initialized
    if _initialized:
        return

    level = _get_log_level()
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        fmt = LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT
        handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
        root_logger.addHandler(handler)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger in the runconf namespace.

    :param name: Module name, usually __name__.
    :return: Configured logger instance.
    """
    _init_logging()

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def set_debug(enabled: bool = True) -> None:
    """
    Switches the runconf loggers between DEBUG and WARNING.

    :param enabled: True for DEBUG output.
    """
    _init_logging()
    level = logging.DEBUG if enabled else logging.WARNING
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)

    fmt = LOG_FORMAT_DEBUG if enabled else LOG_FORMAT
    for handler in root_logger.handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
