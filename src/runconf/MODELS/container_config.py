"""
Models for the canonical container configuration pair: the image-facing
ContainerConfig and the host-facing HostConfig.

Field aliases are the serialized document names ('Env', 'Cmd', 'Binds', ...).
Both snake_case names and aliases are accepted on input; unknown input
fields are ignored.
"""
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator

from ..errors import InvalidPortError, InvalidSizeError
from ..UTILS.port_spec import normalize_port
from ..UTILS.units import ram_in_bytes
from .union_value import Command, Entrypoint


def _keys(value: Any) -> Any:
    """
    Set-valued fields are serialized as {key: {}} maps; accept that,
    a plain list, or null.
    """
    if value is None:
        return set()
    if isinstance(value, dict):
        return set(value.keys())
    return value


def _key_map(values: Set[str]) -> Dict[str, Dict]:
    return {key: {} for key in sorted(values)}


class ContainerConfig(BaseModel):
    """
    Image-facing configuration: everything that describes the process
    running inside the container.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hostname: str = Field(default="", alias="Hostname")
    domainname: str = Field(default="", alias="Domainname")
    user: str = Field(default="", alias="User")

    # Stdio
    attach_stdin: bool = Field(default=False, alias="AttachStdin")
    attach_stdout: bool = Field(default=False, alias="AttachStdout")
    attach_stderr: bool = Field(default=False, alias="AttachStderr")
    tty: bool = Field(default=False, alias="Tty")
    open_stdin: bool = Field(default=False, alias="OpenStdin")
    stdin_once: bool = Field(default=False, alias="StdinOnce")

    # Networking
    exposed_ports: Set[str] = Field(default_factory=set, alias="ExposedPorts")

    # Environment
    env: List[str] = Field(default_factory=list, alias="Env")

    # Execution
    cmd: Optional[Command] = Field(default=None, alias="Cmd")
    entrypoint: Optional[Entrypoint] = Field(default=None, alias="Entrypoint")
    image: str = Field(default="", alias="Image")
    working_dir: str = Field(default="", alias="WorkingDir")

    # Storage
    volumes: Set[str] = Field(default_factory=set, alias="Volumes")

    # Metadata
    labels: Dict[str, str] = Field(default_factory=dict, alias="Labels")

    @field_validator("exposed_ports", mode="before")
    @classmethod
    def _normalize_ports(cls, value: Any) -> Any:
        value = _keys(value)
        if not isinstance(value, (set, list, tuple, frozenset)):
            return value
        try:
            return {normalize_port(port) for port in value}
        except InvalidPortError as e:
            raise ValueError(str(e)) from e

    @field_validator("volumes", mode="before")
    @classmethod
    def _volume_keys(cls, value: Any) -> Any:
        return _keys(value)

    @field_validator("env", "labels", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "labels" else []
        return value

    @field_serializer("exposed_ports", "volumes")
    def _serialize_key_set(self, values: Set[str]) -> Dict[str, Dict]:
        return _key_map(values)


class PortBinding(BaseModel):
    """
    Host side of a published port. An empty HostPort means ephemeral.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    host_ip: str = Field(default="", alias="HostIp")
    host_port: str = Field(default="", alias="HostPort")


class HostConfig(BaseModel):
    """
    Host-facing configuration: bind mounts, links and resource limits.

    `binds` is None when no bind mount was requested, which callers
    distinguish from an explicitly empty list.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    binds: Optional[List[str]] = Field(default=None, alias="Binds")
    links: List[str] = Field(default_factory=list, alias="Links")

    # Resources
    memory: int = Field(default=0, alias="Memory")
    memory_swap: int = Field(default=0, alias="MemorySwap")
    cpu_shares: int = Field(default=0, alias="CpuShares")
    cpuset_cpus: str = Field(default="", alias="CpusetCpus")

    # Networking
    port_bindings: Dict[str, List[PortBinding]] = Field(default_factory=dict, alias="PortBindings")

    # Lifecycle
    auto_remove: bool = Field(default=False, alias="AutoRemove")

    @field_validator("memory", mode="before")
    @classmethod
    def _memory_bytes(cls, value: Any) -> Any:
        if value is None:
            return 0
        try:
            return ram_in_bytes(value)
        except InvalidSizeError as e:
            raise ValueError(str(e)) from e

    @field_validator("memory_swap", mode="before")
    @classmethod
    def _swap_bytes(cls, value: Any) -> Any:
        # -1 means unlimited swap
        if value is None:
            return 0
        if value == -1 and not isinstance(value, bool):
            return -1
        try:
            return ram_in_bytes(value)
        except InvalidSizeError as e:
            raise ValueError(str(e)) from e

    @field_validator("links", mode="before")
    @classmethod
    def _null_links(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("port_bindings", mode="before")
    @classmethod
    def _null_bindings(cls, value: Any) -> Any:
        return {} if value is None else value


def to_document(config: ContainerConfig, host: HostConfig) -> Dict[str, Any]:
    """
    Renders a configuration pair as a JSON-ready document, with the host
    configuration nested under 'HostConfig'.

    :param config: The image-facing configuration.
    :param host: The host-facing configuration.
    :return: A dictionary using the serialized field names.
    """
    document = config.model_dump(by_alias=True, mode="json")
    document["HostConfig"] = host.model_dump(by_alias=True, mode="json")
    return document
