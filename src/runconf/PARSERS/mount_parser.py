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
Parser for `-v` volume tokens.

Grammar, split on ':':
    /container                 named volume
    /host:/container           bind mount
    /host:/container:mode      bind mount with mode (ro, rw, z, Z, roZ, ...)

The two-segment form is always host:container. A bare path:mode such as
'/tmp:ro' is rejected because 'ro' is not an absolute container path.
"""
import posixpath
import re

from ..errors import InvalidMountError
from ..MODELS.mount_spec import AccessMode, BindMount, LabelMode, MountMode, MountSpec, NamedVolume
from ..UTILS.log import get_logger

logger = get_logger(__name__)

_MODE_PATTERN = re.compile(r'(ro|rw)?(z|Z)?')


class MountParser:
    """
    Parser for volume tokens.
    """
    @staticmethod
    def parse(token: str) -> MountSpec:
        """
        Parses one volume token.

        Args:
            token (str): The token, e.g. '/data' or '/srv:/data:ro'.

        Returns:
            MountSpec: A NamedVolume or a BindMount.

        Raises:
            InvalidMountError: If the token is malformed or targets the root.
        """
        if not isinstance(token, str):
            raise InvalidMountError(f"Invalid volume specification: {token!r}")

        parts = token.split(':')

        if len(parts) == 1:
            container = MountParser._check_container_path(parts[0], token)
            logger.debug("Volume %r is a named volume", token)
            return NamedVolume(container_path=container)

        if len(parts) == 2:
            host, container = parts
            mode = None
        elif len(parts) == 3:
            host, container, raw_mode = parts
            mode = MountParser.parse_mode(raw_mode, token)
        else:
            raise InvalidMountError(
                f"Invalid volume specification: {token!r}, expected 1 to 3 ':'-separated parts"
            )

        if not host:
            raise InvalidMountError(f"Invalid volume specification: {token!r}, empty host path")
        container = MountParser._check_container_path(container, token)

        logger.debug("Volume %r is a bind mount", token)
        return BindMount(host_path=host, container_path=container, mode=mode)

    @staticmethod
    def parse_mode(raw: str, token: str = "") -> MountMode:
        """
        Parses a mode keyword such as 'ro', 'rw', 'z', 'Z' or 'roZ'.

        Args:
            raw (str): The keyword.
            token (str): The full volume token, for error messages.

        Returns:
            MountMode: The access and relabel modes.
        """
        match = _MODE_PATTERN.fullmatch(raw)
        if not raw or not match:
            raise InvalidMountError(f"Invalid volume mode {raw!r} in {token or raw!r}")
        access, label = match.groups()
        return MountMode(
            access=AccessMode(access or "rw"),
            label=LabelMode(label or ""),
            raw=raw,
        )

    @staticmethod
    def _check_container_path(path: str, token: str) -> str:
        if not path:
            raise InvalidMountError(f"Invalid volume specification: {token!r}, empty container path")
        if not path.startswith('/'):
            raise InvalidMountError(
                f"Invalid volume specification: {token!r}, container path must be absolute"
            )
        if posixpath.normpath(path).strip('/') == '':
            raise InvalidMountError(f"Invalid volume specification: {token!r}, cannot mount over /")
        return path
