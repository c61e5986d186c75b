"""Computing a JSON Patch (RFC 6902) that turns one document into another."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any

from .apply import _json_equal
from .operations import AddOperation, Operation, Patch, RemoveOperation, ReplaceOperation
from .pointer import Pointer


def _diff_value(left: Any, right: Any, pointer: Pointer) -> Iterator[Operation]:
    if isinstance(left, dict) and isinstance(right, dict):
        yield from _diff_object(left, right, pointer)
    elif isinstance(left, list) and isinstance(right, list):
        yield from _diff_array(left, right, pointer)
    elif not _json_equal(left, right):
        yield ReplaceOperation(path=pointer, value=copy.deepcopy(right))


def _diff_array(left: list, right: list, pointer: Pointer) -> Iterator[Operation]:
    common = min(len(left), len(right))
    for index, (left_item, right_item) in enumerate(zip(left, right)):
        yield from _diff_value(left_item, right_item, pointer.child(index))
    # Each removal shifts the tail left, so every surplus element sits at `common`.
    for _ in left[common:]:
        yield RemoveOperation(path=pointer.child(common))
    for index, right_item in enumerate(right[common:], start=common):
        yield AddOperation(path=pointer.child(index), value=copy.deepcopy(right_item))


def _diff_object(left: dict, right: dict, pointer: Pointer) -> Iterator[Operation]:
    for key, right_value in right.items():
        child = pointer.child(key)
        if key in left:
            yield from _diff_value(left[key], right_value, child)
        else:
            yield AddOperation(path=child, value=copy.deepcopy(right_value))
    for key in left:
        if key not in right:
            yield RemoveOperation(path=pointer.child(key))


def diff(left: Any, right: Any) -> Patch:
    """Return a patch that, applied to ``left``, yields ``right``.

    >>> diff({"a": 1, "b": 2}, {"a": 3}).to_json()
    '[{"op":"replace","path":"/a","value":3},{"op":"remove","path":"/b"}]'
    """
    return Patch(list(_diff_value(left, right, Pointer())))