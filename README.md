# jsonmend

A library that applies JSON Patch (RFC 6902) and JSON Merge Patch (RFC 7396)
to plain Python documents. It can also compute a patch that turns one document
into another. Here a document is any value that `json.loads` returns, so it is
built from dicts, lists, strings, numbers, booleans and `None`.

The package has four modules:

- `jsonmend.pointer` handles JSON Pointers (RFC 6901).
- `jsonmend.operations` holds the patch operations and the `Patch` type.
- `jsonmend.apply` applies patches and merge patches.
- `jsonmend.diff` computes a patch between two documents.

## Installation

```
pip install jsonmend
```

## Applying a JSON Patch

```python
from jsonmend.operations import Patch
from jsonmend.apply import apply_patch

doc = [{"name": "Andrew"}, {"name": "Maxim"}]
patch = Patch.from_list([
    {"op": "test", "path": "/0/name", "value": "Andrew"},
    {"op": "add", "path": "/0/happy", "value": True},
])

doc = apply_patch(doc, patch)
assert doc == [{"name": "Andrew", "happy": True}, {"name": "Maxim"}]
```

`apply_patch(doc, operations)` accepts a `Patch` or any iterable of operation
objects. It also accepts plain dicts in their JSON form. Containers are changed
in place. Use the return value, because an operation on the empty path `""`
replaces the whole document.

The patch is applied completely or not at all. If an operation fails, the
operations already applied are undone and a `jsonmend.apply.PatchError` is
raised. The error has these attributes:

- `operation`: the index of the operation that failed.
- `path`: its path, as a `Pointer`.
- `kind`: a `PatchErrorKind`, which is one of:
  - `TEST_FAILED`: the value did not match.
  - `INVALID_FROM_POINTER`: the `"from"` path is invalid.
  - `INVALID_POINTER`: the path is invalid.
  - `CANNOT_MOVE_INSIDE_ITSELF`: a value cannot be moved inside itself.

The error message has the form
`operation '/1' failed at path '/a/b': path is invalid`.

`apply_patch_unsafe(doc, operations)` applies operations in the same way but
does not undo them. After a failure, the document may be left partly changed.

A `test` operation compares values strictly by JSON type. Booleans never equal
numbers, and integers never equal floats. So `1` does not match `1.0`, and
`True` does not match `1`.

## Building and serialising patches

The operation classes are frozen dataclasses:

- `AddOperation(path, value)`
- `RemoveOperation(path)`
- `ReplaceOperation(path, value)`
- `MoveOperation(from_, path)`
- `CopyOperation(from_, path)`
- `TestOperation(path, value)`

A path may be given as a `Pointer` or as a pointer string.

`operation_from_dict` builds a single operation from its JSON object. Fields it
does not know are ignored. It raises `ValueError` for an unknown `op` or a
missing field.

A `Patch` is an ordered list of operations. It supports `len`, iteration and
indexing, and it has these methods:

- `Patch.from_list` builds a patch from a list of operation objects.
- `Patch.from_json` parses a patch from JSON text.
- `to_list` returns the patch as a list of operation dicts.
- `to_json` returns compact JSON, or indented JSON with `pretty=True`.

Each operation has `to_dict` and `to_json` as well. `str(op)` gives the compact
JSON and `format(op, "#")` gives the indented JSON.

```python
from jsonmend.operations import Patch, AddOperation

text = '[{"op":"add","path":"/a/b","value":1},{"op":"remove","path":"/c"}]'
assert Patch.from_json(text).to_json() == text

op = AddOperation(path="/a/b/c", value=["hello", "bye"])
assert str(op) == '{"op":"add","path":"/a/b/c","value":["hello","bye"]}'
```

## JSON Pointers

`jsonmend.pointer.Pointer` holds a pointer as a tuple of decoded tokens and
has these methods:

- `Pointer.parse("/a/b~1c")` gives the tokens `("a", "b/c")`.
- `str(pointer)` encodes the pointer back to a string.
- `resolve(doc)` returns the value the pointer refers to.
- `child`, `split_back`, `starts_with` and `is_root` work with the structure
  of the pointer.

`escape_token` and `unescape_token` encode and decode a single token.
`parse_index` reads an array index, including `-`. Malformed pointers and
pointers that do not resolve raise `InvalidPointerError`, which is a subclass
of `ValueError`.

## JSON Merge Patch

```python
from jsonmend.apply import merge

doc = {"title": "Goodbye!", "author": {"givenName": "John", "familyName": "Doe"}}
doc = merge(doc, {"title": "Hello!", "author": {"familyName": None}})
assert doc == {"title": "Hello!", "author": {"givenName": "John"}}
```

In a merge patch, a `None` value removes that key. A patch that is not an
object replaces the target outright. Objects in the document are updated in
place, and the result is returned.

## Diffing documents

```python
from jsonmend.diff import diff
from jsonmend.apply import apply_patch

left = {"tags": ["example", "sample"], "title": "Goodbye!"}
right = {"tags": ["example"], "title": "Hello!"}

patch = diff(left, right)
assert patch.to_list() == [
    {"op": "remove", "path": "/tags/1"},
    {"op": "replace", "path": "/title", "value": "Hello!"},
]
assert apply_patch(left, patch) == right
```

`diff` walks objects and arrays and produces `add`, `remove` and `replace`
operations. Arrays are compared position by position, and `diff` does not
detect moved or copied values.

## What it does not do

`jsonmend` is a library only. It has no command-line tool. It works on
documents that are already parsed, and it does not read or write files. It
also does not produce JSON Schema or OpenAPI descriptions of patches.

## Running the tests

```
pip install -e ".[test]"
pytest
```