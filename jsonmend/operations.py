"""JSON Patch (RFC 6902) operations and patches, with JSON (de)serialisation."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .pointer import Pointer


def _render(data: Any, pretty: bool) -> str:
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _coerce_pointer(value: Any) -> Pointer:
    if isinstance(value, Pointer):
        return value
    if isinstance(value, str):
        return Pointer.parse(value)
    raise TypeError(f"expected a Pointer or a pointer string, got {type(value).__name__}")


class _JsonDisplay:
    """Gives ``str()`` compact JSON and ``format(x, '#')`` indented JSON."""

    __slots__ = ()

    def to_json(self, pretty: bool = False) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_json(pretty=False)

    def __format__(self, spec: str) -> str:
        if spec == "#":
            return self.to_json(pretty=True)
        if spec == "":
            return self.to_json(pretty=False)
        raise ValueError(f"unsupported format specifier {spec!r}")


@dataclass(frozen=True)
class AddOperation(_JsonDisplay):
    """Add ``value`` at ``path``."""

    path: Pointer = field(default_factory=Pointer)
    value: Any = None
    op: ClassVar[str] = "add"

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "path": str(self.path), "value": self.value}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


@dataclass(frozen=True)
class RemoveOperation(_JsonDisplay):
    """Remove the value at ``path``."""

    path: Pointer = field(default_factory=Pointer)
    op: ClassVar[str] = "remove"

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "path": str(self.path)}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


@dataclass(frozen=True)
class ReplaceOperation(_JsonDisplay):
    """Replace the value at ``path`` with ``value``."""

    path: Pointer = field(default_factory=Pointer)
    value: Any = None
    op: ClassVar[str] = "replace"

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "path": str(self.path), "value": self.value}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


@dataclass(frozen=True)
class MoveOperation(_JsonDisplay):
    """Move the value at ``from_`` to ``path``."""

    from_: Pointer = field(default_factory=Pointer)
    path: Pointer = field(default_factory=Pointer)
    op: ClassVar[str] = "move"

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_", _coerce_pointer(self.from_))
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "from": str(self.from_), "path": str(self.path)}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


@dataclass(frozen=True)
class CopyOperation(_JsonDisplay):
    """Copy the value at ``from_`` to ``path``."""

    from_: Pointer = field(default_factory=Pointer)
    path: Pointer = field(default_factory=Pointer)
    op: ClassVar[str] = "copy"

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_", _coerce_pointer(self.from_))
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "from": str(self.from_), "path": str(self.path)}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


@dataclass(frozen=True)
class TestOperation(_JsonDisplay):
    """Check that the value at ``path`` equals ``value``."""

    __test__ = False

    path: Pointer = field(default_factory=Pointer)
    value: Any = None
    op: ClassVar[str] = "test"

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _coerce_pointer(self.path))

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "path": str(self.path), "value": self.value}

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_dict(), pretty)


Operation = Union[
    AddOperation,
    RemoveOperation,
    ReplaceOperation,
    MoveOperation,
    CopyOperation,
    TestOperation,
]

_BY_NAME: dict[str, type] = {
    cls.op: cls
    for cls in (
        AddOperation,
        RemoveOperation,
        ReplaceOperation,
        MoveOperation,
        CopyOperation,
        TestOperation,
    )
}


def _required(data: Mapping[str, Any], name: str, op: str) -> Any:
    if name not in data:
        raise ValueError(f"missing field {name!r} in {op!r} operation")
    return data[name]


def _required_pointer(data: Mapping[str, Any], name: str, op: str) -> Pointer:
    raw = _required(data, name, op)
    if not isinstance(raw, str):
        raise ValueError(f"field {name!r} in {op!r} operation must be a string")
    return Pointer.parse(raw)


def operation_from_dict(data: Mapping[str, Any]) -> Operation:
    """Build an operation from its JSON object form; unknown fields are ignored."""
    if not isinstance(data, Mapping):
        raise ValueError(f"patch operation must be an object, got {type(data).__name__}")
    op = data.get("op")
    cls = _BY_NAME.get(op) if isinstance(op, str) else None
    if cls is None:
        raise ValueError(f"unknown patch operation {op!r}")
    path = _required_pointer(data, "path", op)
    if cls is RemoveOperation:
        return RemoveOperation(path=path)
    if cls in (MoveOperation, CopyOperation):
        return cls(from_=_required_pointer(data, "from", op), path=path)
    return cls(path=path, value=_required(data, "value", op))


@dataclass
class Patch(_JsonDisplay):
    """An ordered list of patch operations."""

    operations: list[Operation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.operations = list(self.operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __getitem__(self, index):
        return self.operations[index]

    @classmethod
    def from_list(cls, data: list[Any]) -> Patch:
        """Build a patch from a list of operation objects."""
        if not isinstance(data, list):
            raise ValueError(f"patch must be an array, got {type(data).__name__}")
        return cls([operation_from_dict(item) for item in data])

    @classmethod
    def from_json(cls, text: str | bytes) -> Patch:
        """Parse a patch from JSON text."""
        return cls.from_list(json.loads(text))

    def to_list(self) -> list[dict[str, Any]]:
        return [operation.to_dict() for operation in self.operations]

    def to_json(self, pretty: bool = False) -> str:
        return _render(self.to_list(), pretty)