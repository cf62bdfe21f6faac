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
Reconciliation of a user-declared ContainerConfig with the defaults
declared by its image.

User values take precedence; set-like fields accumulate from both sides.
"""
import copy

from ..MODELS.container_config import ContainerConfig
from ..UTILS.log import get_logger
from ..UTILS.port_spec import normalize_port

logger = get_logger(__name__)

# Fields with their own merge rule; every other field falls back to
# "adopt the image value when the user value is unset".
_MERGED_FIELDS = ("exposed_ports", "env", "volumes", "labels", "entrypoint", "cmd")


def env_key(entry: str) -> str:
    """Returns the variable name of a KEY=VALUE entry."""
    return entry.split('=', 1)[0]


def merge(primary: ContainerConfig, secondary: ContainerConfig) -> None:
    """
    Folds `secondary` (image defaults) into `primary` (user config) in place.

    - ExposedPorts, Volumes: union.
    - Env: image entries are appended only for keys the user did not set.
    - Labels: union, user values win.
    - Entrypoint, Cmd: taken from the image when the user's is absent or empty.
    - Any other field still at its zero value takes the image value.

    `primary` is mutated, so one instance must not be merged from
    several threads at once.

    :param primary: The user configuration, updated in place.
    :param secondary: The image configuration; left untouched.
    :raises InvalidPortError: If either side holds a malformed port spec.
    """
    ports = {normalize_port(port) for port in primary.exposed_ports}
    for port in secondary.exposed_ports:
        normalized = normalize_port(port)
        if normalized not in ports:
            logger.debug("Adding exposed port %s from image", normalized)
            ports.add(normalized)
    primary.exposed_ports = ports

    defined = {env_key(entry) for entry in primary.env}
    env = list(primary.env)
    for entry in list(secondary.env):
        key = env_key(entry)
        if key in defined:
            continue
        logger.debug("Adding env %s from image", key)
        env.append(entry)
        defined.add(key)
    primary.env = env

    primary.volumes = set(primary.volumes) | set(secondary.volumes)

    labels = dict(secondary.labels)
    labels.update(primary.labels)
    primary.labels = labels

    if primary.entrypoint is None or primary.entrypoint.is_empty():
        if secondary.entrypoint is not None:
            primary.entrypoint = secondary.entrypoint
    if primary.cmd is None or primary.cmd.is_empty():
        if secondary.cmd is not None:
            primary.cmd = secondary.cmd

    for name in type(primary).model_fields:
        if name in _MERGED_FIELDS:
            continue
        if not getattr(primary, name):
            setattr(primary, name, copy.deepcopy(getattr(secondary, name)))
