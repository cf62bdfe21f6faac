"""
Structural comparison of configurations, used to decide whether applying
a configuration would change anything.
"""
from typing import Any, Set, Tuple, Union

from ..errors import InvalidPortError
from ..MODELS.container_config import ContainerConfig, HostConfig
from ..MODELS.union_value import UnionValue
from ..UTILS.port_spec import normalize_port

Config = Union[ContainerConfig, HostConfig]


def _field_values(a: Any, b: Any) -> Tuple[Any, Any]:
    # An absent union value and an empty one are the same command line
    if isinstance(a, UnionValue) or isinstance(b, UnionValue):
        return tuple(a or ()), tuple(b or ())
    return a, b


def _port_keys(ports: Set[str]) -> Set[str]:
    # Sets may be mutated after validation, so normalize as merge does
    keys = set()
    for port in ports:
        try:
            keys.add(normalize_port(port))
        except InvalidPortError:
            keys.add(port)
    return keys


def compare(a: Config, b: Config) -> bool:
    """
    Compares two configurations of the same kind.

    Sets (ExposedPorts, Volumes) and mappings compare regardless of
    order; lists such as Env, Cmd and Binds compare element by element.

    :return: True if equivalent. Never raises.
    """
    if a is None or b is None or type(a) is not type(b):
        return False
    for name in type(a).model_fields:
        value_a, value_b = _field_values(getattr(a, name), getattr(b, name))
        if name == "exposed_ports":
            value_a, value_b = _port_keys(value_a), _port_keys(value_b)
        if value_a != value_b:
            return False
    return True
