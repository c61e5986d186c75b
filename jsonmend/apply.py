"""Applying JSON Patch (RFC 6902) and JSON Merge Patch (RFC 7396) to documents."""

from __future__ import annotations

import copy
import enum
from collections.abc import Iterable, Mapping
from typing import Any

from .operations import (
    AddOperation,
    CopyOperation,
    MoveOperation,
    Operation,
    RemoveOperation,
    ReplaceOperation,
    TestOperation,
    operation_from_dict,
)
from .pointer import InvalidPointerError, Pointer, parse_index


class PatchErrorKind(enum.Enum):
    """Why a patch operation failed."""

    TEST_FAILED = "value did not match"
    INVALID_FROM_POINTER = '"from" path is invalid'
    INVALID_POINTER = "path is invalid"
    CANNOT_MOVE_INSIDE_ITSELF = "cannot move the value inside itself"

    def __str__(self) -> str:
        return self.value


class PatchError(Exception):
    """Raised when an operation of a patch cannot be applied."""

    def __init__(self, operation: int, path: Pointer, kind: PatchErrorKind) -> None:
        self.operation = operation
        self.path = path
        self.kind = kind
        super().__init__(f"operation '/{operation}' failed at path '{path}': {kind}")


class _Failure(Exception):
    def __init__(self, kind: PatchErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


_MISSING = object()


class _Document:
    """Holds the root so that operations on the empty pointer can replace it."""

    __slots__ = ("root",)

    def __init__(self, root: Any) -> None:
        self.root = root


def _resolve(pointer: Pointer, root: Any, kind: PatchErrorKind) -> Any:
    try:
        return pointer.resolve(root)
    except InvalidPointerError:
        raise _Failure(kind) from None


def _json_equal(left: Any, right: Any) -> bool:
    """Compare JSON values; booleans, integers and floats never equal each other."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, dict):
        return (
            isinstance(right, dict)
            and left.keys() == right.keys()
            and all(_json_equal(value, right[key]) for key, value in left.items())
        )
    if isinstance(left, list):
        return (
            isinstance(right, list)
            and len(left) == len(right)
            and all(_json_equal(a, b) for a, b in zip(left, right))
        )
    if isinstance(left, float) or isinstance(right, float):
        return isinstance(left, float) and isinstance(right, float) and left == right
    return type(left) is type(right) and left == right


def _add(doc: _Document, path: Pointer, value: Any) -> Any:
    """Add ``value``; return the value it displaced, or ``_MISSING``."""
    split = path.split_back()
    if split is None:
        previous, doc.root = doc.root, value
        return previous
    parent_path, last = split
    parent = _resolve(parent_path, doc.root, PatchErrorKind.INVALID_POINTER)
    if isinstance(parent, dict):
        previous = parent.get(last, _MISSING)
        parent[last] = value
        return previous
    if isinstance(parent, list):
        try:
            index = parse_index(last, len(parent), allow_next=True)
        except InvalidPointerError:
            raise _Failure(PatchErrorKind.INVALID_POINTER) from None
        parent.insert(index, value)
        return _MISSING
    raise _Failure(PatchErrorKind.INVALID_POINTER)


def _remove(doc: _Document, path: Pointer, allow_last: bool) -> Any:
    split = path.split_back()
    if split is None:
        raise _Failure(PatchErrorKind.INVALID_POINTER)
    parent_path, last = split
    parent = _resolve(parent_path, doc.root, PatchErrorKind.INVALID_POINTER)
    if isinstance(parent, dict):
        if last not in parent:
            raise _Failure(PatchErrorKind.INVALID_POINTER)
        return parent.pop(last)
    if isinstance(parent, list):
        if allow_last and last == "-":
            if not parent:
                raise _Failure(PatchErrorKind.INVALID_POINTER)
            return parent.pop()
        try:
            index = parse_index(last, len(parent), allow_next=False)
        except InvalidPointerError:
            raise _Failure(PatchErrorKind.INVALID_POINTER) from None
        return parent.pop(index)
    raise _Failure(PatchErrorKind.INVALID_POINTER)


def _replace(doc: _Document, path: Pointer, value: Any) -> Any:
    _resolve(path, doc.root, PatchErrorKind.INVALID_POINTER)
    split = path.split_back()
    if split is None:
        previous, doc.root = doc.root, value
        return previous
    parent_path, last = split
    parent = parent_path.resolve(doc.root)
    if isinstance(parent, list):
        key: Any = int(last)
    else:
        key = last
    previous = parent[key]
    parent[key] = value
    return previous


def _move(doc: _Document, from_: Pointer, path: Pointer, allow_last: bool) -> Any:
    if path.starts_with(from_) and len(path.tokens) != len(from_.tokens):
        raise _Failure(PatchErrorKind.CANNOT_MOVE_INSIDE_ITSELF)
    try:
        value = _remove(doc, from_, allow_last)
    except _Failure as failure:
        if failure.kind is PatchErrorKind.INVALID_POINTER:
            raise _Failure(PatchErrorKind.INVALID_FROM_POINTER) from None
        raise
    return _add(doc, path, value)


def _copy(doc: _Document, from_: Pointer, path: Pointer) -> Any:
    source = _resolve(from_, doc.root, PatchErrorKind.INVALID_FROM_POINTER)
    return _add(doc, path, copy.deepcopy(source))


def _test(doc: _Document, path: Pointer, expected: Any) -> None:
    target = _resolve(path, doc.root, PatchErrorKind.INVALID_POINTER)
    if not _json_equal(target, expected):
        raise _Failure(PatchErrorKind.TEST_FAILED)


def _inverse_of_insert(path: Pointer, previous: Any) -> Operation:
    if previous is _MISSING:
        return RemoveOperation(path=path)
    return AddOperation(path=path, value=previous)


def _normalize(operations: Iterable[Any]) -> list[Operation]:
    return [
        operation_from_dict(item) if isinstance(item, Mapping) else item
        for item in operations
    ]


def _apply_all(
    doc: _Document, operations: list[Operation], undo: list[Operation] | None
) -> None:
    for index, operation in enumerate(operations):
        try:
            if isinstance(operation, AddOperation):
                previous = _add(doc, operation.path, copy.deepcopy(operation.value))
                if undo is not None:
                    undo.append(_inverse_of_insert(operation.path, previous))
            elif isinstance(operation, RemoveOperation):
                previous = _remove(doc, operation.path, allow_last=False)
                if undo is not None:
                    undo.append(AddOperation(path=operation.path, value=previous))
            elif isinstance(operation, ReplaceOperation):
                previous = _replace(doc, operation.path, copy.deepcopy(operation.value))
                if undo is not None:
                    undo.append(ReplaceOperation(path=operation.path, value=previous))
            elif isinstance(operation, MoveOperation):
                previous = _move(doc, operation.from_, operation.path, allow_last=False)
                if undo is not None:
                    if previous is not _MISSING:
                        undo.append(AddOperation(path=operation.path, value=previous))
                    undo.append(MoveOperation(from_=operation.path, path=operation.from_))
            elif isinstance(operation, CopyOperation):
                previous = _copy(doc, operation.from_, operation.path)
                if undo is not None:
                    undo.append(_inverse_of_insert(operation.path, previous))
            elif isinstance(operation, TestOperation):
                _test(doc, operation.path, operation.value)
            else:
                raise TypeError(f"not a patch operation: {operation!r}")
        except _Failure as failure:
            raise PatchError(index, operation.path, failure.kind) from None


def _undo_all(doc: _Document, undo: list[Operation]) -> None:
    for operation in reversed(undo):
        try:
            if isinstance(operation, AddOperation):
                _add(doc, operation.path, operation.value)
            elif isinstance(operation, RemoveOperation):
                _remove(doc, operation.path, allow_last=True)
            elif isinstance(operation, ReplaceOperation):
                _replace(doc, operation.path, operation.value)
            elif isinstance(operation, MoveOperation):
                _move(doc, operation.from_, operation.path, allow_last=True)
        except _Failure as failure:
            raise RuntimeError(f"unable to undo applied patches: {failure.kind}") from None


def apply_patch(doc: Any, operations: Iterable[Any]) -> Any:
    """Apply a JSON Patch to ``doc`` in place and return the resulting document.

    Containers are changed in place; the return value matters when the root
    itself is replaced. If any operation fails, every earlier change is
    reverted before :class:`PatchError` is raised.
    """
    ops = _normalize(operations)
    document = _Document(doc)
    undo: list[Operation] = []
    try:
        _apply_all(document, ops, undo)
    except PatchError:
        _undo_all(document, undo)
        raise
    return document.root


def apply_patch_unsafe(doc: Any, operations: Iterable[Any]) -> Any:
    """Apply a JSON Patch like :func:`apply_patch`, without reverting on failure."""
    document = _Document(doc)
    _apply_all(document, _normalize(operations), None)
    return document.root


def merge(doc: Any, patch: Any) -> Any:
    """Apply a JSON Merge Patch to ``doc`` and return the result.

    Objects in ``doc`` are updated in place where possible.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    if not isinstance(doc, dict):
        doc = {}
    for key, value in patch.items():
        if value is None:
            doc.pop(key, None)
        else:
            doc[key] = merge(doc.get(key), value)
    return doc