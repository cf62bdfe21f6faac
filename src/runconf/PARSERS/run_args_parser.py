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
Normalization of `docker run` style flag values into a
ContainerConfig / HostConfig pair.

Raw argv handling is left to the caller (the CLI uses click); this module
starts from already-tokenized flag values collected in RunFlags.
"""
from typing import Dict, List, Mapping, Optional, Set, Tuple, Union

from pydantic import BaseModel

from ..errors import (
    ConflictingFlagsError,
    InvalidAttachError,
    InvalidLinkError,
    SchemaError,
)
from ..MODELS.container_config import ContainerConfig, HostConfig, PortBinding
from ..MODELS.mount_spec import BindMount
from ..MODELS.union_value import Command, Entrypoint
from ..UTILS.log import get_logger
from ..UTILS.port_spec import expand_expose, parse_publish
from ..UTILS.units import ram_in_bytes
from .env_file_parser import EnvFileParser
from .mount_parser import MountParser

logger = get_logger(__name__)

ATTACH_STREAMS = ("stdin", "stdout", "stderr")


class RunFlags(BaseModel):
    """
    Flag values of a single `run` invocation, one attribute per flag.
    Repeatable flags are lists in command-line order.
    """
    # Stdio
    attach: List[str] = []
    detach: bool = False
    interactive: bool = False
    tty: bool = False

    # Lifecycle
    auto_remove: bool = False

    # Storage
    volumes: List[str] = []

    # Networking
    links: List[str] = []
    expose: List[str] = []
    publish: List[str] = []
    hostname: str = ""
    domainname: str = ""

    # Environment
    env: List[str] = []
    env_files: List[str] = []
    labels: List[str] = []

    # Resources
    memory: Optional[Union[int, str]] = None
    memory_swap: Optional[Union[int, str]] = None
    cpu_shares: int = 0
    cpuset_cpus: str = ""

    # Execution
    user: str = ""
    working_dir: str = ""
    entrypoint: Optional[str] = None
    image: str = ""
    command: List[str] = []


class RunArgumentParser:
    """
    Turns RunFlags into a validated configuration pair.
    """
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the parser.

        :param environ: Environment used to resolve bare `-e KEY` tokens.
        """
        self.env_parser = EnvFileParser(environ)

    def parse(self, flags: RunFlags) -> Tuple[ContainerConfig, HostConfig]:
        """
        Validates the flags and builds the configuration pair.

        :param flags: The tokenized flag values.
        :return: (ContainerConfig, HostConfig)
        :raises RunConfigError: On any invalid or conflicting flag; no
            partially built configuration is returned.
        """
        attach_stdin, attach_stdout, attach_stderr = self._resolve_attach(flags)

        volumes, binds = self.route_volumes(flags.volumes)
        links = [self.parse_link(token) for token in flags.links]
        env = self._resolve_env(flags)
        exposed_ports, port_bindings = self._resolve_ports(flags)
        memory, memory_swap = self._resolve_memory(flags)
        labels = self._resolve_labels(flags.labels)

        if not flags.image:
            raise SchemaError("An image name is required")

        config = ContainerConfig(
            hostname=flags.hostname,
            domainname=flags.domainname,
            user=flags.user,
            attach_stdin=attach_stdin,
            attach_stdout=attach_stdout,
            attach_stderr=attach_stderr,
            tty=flags.tty,
            open_stdin=flags.interactive,
            stdin_once=flags.interactive and attach_stdin,
            exposed_ports=exposed_ports,
            env=env,
            cmd=Command(*flags.command) if flags.command else None,
            entrypoint=Entrypoint(flags.entrypoint) if flags.entrypoint else None,
            image=flags.image,
            working_dir=flags.working_dir,
            volumes=volumes,
            labels=labels,
        )
        host = HostConfig(
            binds=binds,
            links=links,
            memory=memory,
            memory_swap=memory_swap,
            cpu_shares=flags.cpu_shares,
            cpuset_cpus=flags.cpuset_cpus,
            port_bindings=port_bindings,
            auto_remove=flags.auto_remove,
        )
        logger.debug("Parsed run flags for image %s", flags.image)
        return config, host

    def _resolve_attach(self, flags: RunFlags) -> Tuple[bool, bool, bool]:
        for stream in flags.attach:
            if stream not in ATTACH_STREAMS:
                raise InvalidAttachError(
                    f"Invalid attach value {stream!r}, valid streams are stdin, stdout and stderr"
                )

        if flags.detach:
            if flags.attach:
                raise ConflictingFlagsError("Conflicting options: -a and -d")
            if flags.auto_remove:
                raise ConflictingFlagsError("Conflicting options: --rm and -d")
            return False, False, False

        if not flags.attach:
            # Foreground default: stream output, stdin only when interactive
            return flags.interactive, True, True

        selected = set(flags.attach)
        return "stdin" in selected, "stdout" in selected, "stderr" in selected

    @staticmethod
    def route_volumes(tokens: List[str]) -> Tuple[Set[str], Optional[List[str]]]:
        """
        Routes volume tokens: named volumes into a set of container paths,
        bind mounts into a list of literals in first-seen order.

        :param tokens: The `-v` tokens.
        :return: (volumes, binds); binds is None when there are no bind mounts.
        """
        volumes: Set[str] = set()
        binds: Optional[List[str]] = None
        for token in tokens:
            mount = MountParser.parse(token)
            if isinstance(mount, BindMount):
                if binds is None:
                    binds = []
                binds.append(mount.literal)
            else:
                volumes.add(mount.container_path)
        return volumes, binds

    @staticmethod
    def parse_link(token: str) -> str:
        """
        Validates a link token. A bare name links under its own name.

        :param token: 'name:alias' or 'name'.
        :return: The link as 'name:alias'.
        """
        parts = token.split(':')
        if len(parts) == 1:
            parts = [parts[0], parts[0]]
        if len(parts) != 2 or not all(parts):
            raise InvalidLinkError(f"Invalid link {token!r}, expected name:alias")
        return ':'.join(parts)

    def _resolve_env(self, flags: RunFlags) -> List[str]:
        env: List[str] = []
        for path in flags.env_files:
            env.extend(self.env_parser.parse(path))
        env.extend(self.env_parser.resolve_tokens(flags.env))
        return env

    @staticmethod
    def _resolve_ports(flags: RunFlags) -> Tuple[Set[str], Dict[str, List[PortBinding]]]:
        exposed: Set[str] = set()
        for token in flags.expose:
            exposed.update(expand_expose(token))

        bindings: Dict[str, List[PortBinding]] = {}
        for token in flags.publish:
            for port, host_ip, host_port in parse_publish(token):
                exposed.add(port)
                bindings.setdefault(port, []).append(PortBinding(host_ip=host_ip, host_port=host_port))
        return exposed, bindings

    @staticmethod
    def _resolve_memory(flags: RunFlags) -> Tuple[int, int]:
        memory = ram_in_bytes(flags.memory) if flags.memory is not None else 0

        memory_swap = 0
        if flags.memory_swap is not None:
            if flags.memory_swap in (-1, "-1"):
                memory_swap = -1
            else:
                memory_swap = ram_in_bytes(flags.memory_swap)
            if memory == 0:
                raise ConflictingFlagsError("--memory-swap requires --memory to be set")
            if memory_swap != -1 and memory_swap < memory:
                raise ConflictingFlagsError("--memory-swap must be larger than --memory")
        return memory, memory_swap

    @staticmethod
    def _resolve_labels(tokens: List[str]) -> Dict[str, str]:
        labels: Dict[str, str] = {}
        for token in tokens:
            key, _, value = token.partition('=')
            if not key:
                raise SchemaError(f"Invalid label {token!r}, empty name")
            labels[key] = value
        return labels
