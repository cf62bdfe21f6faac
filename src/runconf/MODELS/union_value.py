"""
Scalar-or-list string values.

Older config documents store Entrypoint and Cmd as a bare string while
newer ones use a list. Both decode to the same ordered sequence, and the
value always serializes back to the list form.
"""
from typing import Any, Iterator, List

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..errors import ShapeError


class UnionValue:
    """
    Immutable ordered sequence of strings that may have been supplied as
    a single scalar.

    Absence is represented by the owning field being None; an instance
    always stands for a present value, possibly empty.
    """
    __slots__ = ("_parts",)

    def __init__(self, *parts: str):
        for part in parts:
            if not isinstance(part, str):
                raise ShapeError(
                    f"{type(self).__name__} elements must be strings, got {type(part).__name__}"
                )
        self._parts = tuple(parts)

    @classmethod
    def decode(cls, raw: Any) -> "UnionValue":
        """
        Decodes a bare string or a list of strings.

        :param raw: The serialized value.
        :return: A new instance holding the ordered sequence.
        :raises ShapeError: If raw is neither a string nor a flat list of strings.
        """
        if isinstance(raw, UnionValue):
            return cls(*raw._parts)
        if isinstance(raw, str):
            return cls(raw)
        if isinstance(raw, (list, tuple)):
            return cls(*raw)
        raise ShapeError(
            f"{cls.__name__} must be a string or a list of strings, got {type(raw).__name__}"
        )

    def encode(self) -> List[str]:
        """Returns the list form."""
        return list(self._parts)

    def slice(self) -> List[str]:
        """Returns a copy of the sequence."""
        return list(self._parts)

    def is_empty(self) -> bool:
        return not self._parts

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parts)

    def __getitem__(self, index):
        return self._parts[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnionValue):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._parts)!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.decode,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.encode(),
            ),
        )


class Entrypoint(UnionValue):
    """
    The executable (and leading arguments) the container runs.
    """
    __slots__ = ()


class Command(UnionValue):
    """
    The default arguments passed to the entrypoint.
    """
    __slots__ = ()
