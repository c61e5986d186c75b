import copy

import pytest

from jsonmend.apply import (
    PatchError,
    PatchErrorKind,
    apply_patch,
    apply_patch_unsafe,
    merge,
)
from jsonmend.operations import AddOperation, Patch, TestOperation


def run(doc, ops):
    return apply_patch(doc, Patch.from_list(ops))


def expect_failure(doc, ops, kind):
    original = copy.deepcopy(doc)
    with pytest.raises(PatchError) as info:
        run(doc, ops)
    assert info.value.kind is kind
    assert doc == original
    return info.value


def test_documented_example():
    doc = [{"name": "Andrew"}, {"name": "Maxim"}]
    result = run(
        doc,
        [
            {"op": "test", "path": "/0/name", "value": "Andrew"},
            {"op": "add", "path": "/0/happy", "value": True},
        ],
    )
    assert result == [{"name": "Andrew", "happy": True}, {"name": "Maxim"}]
    assert result is doc


def test_unsafe_documented_example():
    doc = [{"name": "Andrew"}, {"name": "Maxim"}]
    result = apply_patch_unsafe(
        doc,
        [
            TestOperation(path="/0/name", value="Andrew"),
            AddOperation(path="/0/happy", value=True),
        ],
    )
    assert result == [{"name": "Andrew", "happy": True}, {"name": "Maxim"}]


@pytest.mark.parametrize(
    "doc, ops, expected",
    [
        ({"foo": "bar"}, [{"op": "add", "path": "/baz", "value": "qux"}],
         {"baz": "qux", "foo": "bar"}),
        ({"foo": ["bar", "baz"]}, [{"op": "add", "path": "/foo/1", "value": "qux"}],
         {"foo": ["bar", "qux", "baz"]}),
        ({"baz": "qux", "foo": "bar"}, [{"op": "remove", "path": "/baz"}],
         {"foo": "bar"}),
        ({"foo": ["bar", "qux", "baz"]}, [{"op": "remove", "path": "/foo/1"}],
         {"foo": ["bar", "baz"]}),
        ({"baz": "qux", "foo": "bar"},
         [{"op": "replace", "path": "/baz", "value": "boo"}],
         {"baz": "boo", "foo": "bar"}),
        ({"foo": {"bar": "baz", "waldo": "fred"}, "qux": {"corge": "grault"}},
         [{"op": "move", "from": "/foo/waldo", "path": "/qux/thud"}],
         {"foo": {"bar": "baz"}, "qux": {"corge": "grault", "thud": "fred"}}),
        ({"foo": ["all", "grass", "cows", "eat"]},
         [{"op": "move", "from": "/foo/1", "path": "/foo/3"}],
         {"foo": ["all", "cows", "eat", "grass"]}),
        ({"baz": "qux", "foo": ["a", 2, "c"]},
         [{"op": "test", "path": "/baz", "value": "qux"},
          {"op": "test", "path": "/foo/1", "value": 2}],
         {"baz": "qux", "foo": ["a", 2, "c"]}),
        ({"foo": "bar"},
         [{"op": "add", "path": "/child", "value": {"grandchild": {}}}],
         {"foo": "bar", "child": {"grandchild": {}}}),
        ({"/": 9, "~1": 10}, [{"op": "test", "path": "/~01", "value": 10}],
         {"/": 9, "~1": 10}),
        ({"foo": ["bar"]}, [{"op": "add", "path": "/foo/-", "value": ["abc", "def"]}],
         {"foo": ["bar", ["abc", "def"]]}),
        ({"foo": 1}, [{"op": "copy", "from": "/foo", "path": "/bar"}],
         {"foo": 1, "bar": 1}),
        ({"": 1}, [{"op": "replace", "path": "/", "value": 2}], {"": 2}),
    ],
)
def test_rfc_examples(doc, ops, expected):
    assert run(doc, ops) == expected


def test_replace_root_returns_new_document():
    assert run({"a": 1}, [{"op": "replace", "path": "", "value": [1, 2]}]) == [1, 2]


def test_add_root_replaces_document():
    assert run(None, [{"op": "add", "path": "", "value": {"title": "Hello!"}}]) == {
        "title": "Hello!"
    }


def test_copy_is_independent():
    result = run({"a": {"x": 1}}, [{"op": "copy", "from": "/a", "path": "/b"},
                                   {"op": "add", "path": "/b/y", "value": 2}])
    assert result == {"a": {"x": 1}, "b": {"x": 1, "y": 2}}


def test_test_failure():
    expect_failure({"baz": "qux"}, [{"op": "test", "path": "/baz", "value": "bar"}],
                   PatchErrorKind.TEST_FAILED)


def test_test_string_does_not_match_number():
    expect_failure({"/": 9, "~1": 10}, [{"op": "test", "path": "/~01", "value": "10"}],
                   PatchErrorKind.TEST_FAILED)


def test_test_bool_does_not_match_integer():
    expect_failure({"a": 1}, [{"op": "test", "path": "/a", "value": True}],
                   PatchErrorKind.TEST_FAILED)


def test_add_to_nonexistent_target():
    expect_failure({"foo": "bar"}, [{"op": "add", "path": "/baz/bat", "value": "qux"}],
                   PatchErrorKind.INVALID_POINTER)


@pytest.mark.parametrize("path", ["/foo/3", "/foo/01", "/foo/x"])
def test_add_bad_array_index(path):
    expect_failure({"foo": ["a", "b"]}, [{"op": "add", "path": path, "value": 1}],
                   PatchErrorKind.INVALID_POINTER)


def test_remove_root_is_invalid():
    expect_failure({"a": 1}, [{"op": "remove", "path": ""}],
                   PatchErrorKind.INVALID_POINTER)


def test_remove_dash_is_invalid():
    expect_failure({"a": [1, 2]}, [{"op": "remove", "path": "/a/-"}],
                   PatchErrorKind.INVALID_POINTER)


def test_remove_missing_key():
    expect_failure({"a": 1}, [{"op": "remove", "path": "/b"}],
                   PatchErrorKind.INVALID_POINTER)


def test_replace_missing():
    expect_failure({"a": 1}, [{"op": "replace", "path": "/b", "value": 2}],
                   PatchErrorKind.INVALID_POINTER)


def test_move_inside_itself():
    expect_failure({"a": {"b": 1}}, [{"op": "move", "from": "/a", "path": "/a/c"}],
                   PatchErrorKind.CANNOT_MOVE_INSIDE_ITSELF)


def test_move_to_same_location_is_allowed():
    assert run({"a": 1}, [{"op": "move", "from": "/a", "path": "/a"}]) == {"a": 1}


def test_move_from_missing():
    expect_failure({"a": 1}, [{"op": "move", "from": "/b", "path": "/c"}],
                   PatchErrorKind.INVALID_FROM_POINTER)


def test_copy_from_missing_message():
    error = expect_failure({"a": 1}, [{"op": "copy", "from": "/b", "path": "/c"}],
                           PatchErrorKind.INVALID_FROM_POINTER)
    assert str(error) == "operation '/0' failed at path '/c': \"from\" path is invalid"


def test_error_message_and_fields():
    error = expect_failure(
        {"a": 1},
        [{"op": "add", "path": "/b", "value": 2},
         {"op": "remove", "path": "/missing"}],
        PatchErrorKind.INVALID_POINTER,
    )
    assert error.operation == 1
    assert str(error.path) == "/missing"
    assert str(error) == "operation '/1' failed at path '/missing': path is invalid"


def test_revert_restores_everything():
    doc = {"foo": ["a", "b", "c"], "bar": {"x": 1}, "root": None}
    original = copy.deepcopy(doc)
    ops = [
        {"op": "add", "path": "/bar/x", "value": 5},
        {"op": "remove", "path": "/foo/0"},
        {"op": "replace", "path": "/root", "value": 3},
        {"op": "move", "from": "/foo/0", "path": "/bar/x"},
        {"op": "copy", "from": "/bar", "path": "/baz"},
        {"op": "move", "from": "/foo/0", "path": "/bar/-" if False else "/qux"},
        {"op": "test", "path": "/bar/x", "value": "nope"},
    ]
    with pytest.raises(PatchError) as info:
        apply_patch(doc, Patch.from_list(ops))
    assert info.value.kind is PatchErrorKind.TEST_FAILED
    assert info.value.operation == 6
    assert doc == original


def test_revert_move_to_array_end():
    doc = {"foo": [1, 2], "bar": [3]}
    original = copy.deepcopy(doc)
    ops = [
        {"op": "move", "from": "/foo/0", "path": "/bar/-"},
        {"op": "test", "path": "/bar/0", "value": 99},
    ]
    with pytest.raises(PatchError):
        run(doc, ops)
    assert doc == original


def test_revert_root_replacement_keeps_original_object():
    doc = {"a": [1]}
    with pytest.raises(PatchError):
        run(doc, [{"op": "replace", "path": "", "value": 7},
                  {"op": "test", "path": "", "value": 8}])
    assert doc == {"a": [1]}


def test_unsafe_leaves_partial_changes():
    doc = {"a": 1}
    with pytest.raises(PatchError):
        apply_patch_unsafe(
            doc,
            Patch.from_list([{"op": "add", "path": "/b", "value": 2},
                             {"op": "remove", "path": "/c"}]),
        )
    assert doc == {"a": 1, "b": 2}


def test_accepts_plain_dict_operations():
    assert apply_patch({"a": 1}, [{"op": "remove", "path": "/a"}]) == {}


def test_merge_documented_example():
    doc = {
        "title": "Goodbye!",
        "author": {"givenName": "John", "familyName": "Doe"},
        "tags": ["example", "sample"],
        "content": "This will be unchanged",
    }
    patch = {
        "title": "Hello!",
        "phoneNumber": "placeholder",
        "author": {"familyName": None},
        "tags": ["example"],
    }
    assert merge(doc, patch) == {
        "title": "Hello!",
        "author": {"givenName": "John"},
        "tags": ["example"],
        "content": "This will be unchanged",
        "phoneNumber": "placeholder",
    }


@pytest.mark.parametrize(
    "doc, patch, expected",
    [
        ({"a": "b"}, {"a": "c"}, {"a": "c"}),
        ({"a": "b"}, {"b": "c"}, {"a": "b", "b": "c"}),
        ({"a": "b"}, {"a": None}, {}),
        ({"a": "b", "b": "c"}, {"a": None}, {"b": "c"}),
        ({"a": ["b"]}, {"a": "c"}, {"a": "c"}),
        ({"a": "c"}, {"a": ["b"]}, {"a": ["b"]}),
        ({"a": {"b": "c"}}, {"a": {"b": "d", "c": None}}, {"a": {"b": "d"}}),
        ({"a": [{"b": "c"}]}, {"a": [1]}, {"a": [1]}),
        (["a", "b"], ["c", "d"], ["c", "d"]),
        ({"a": "b"}, ["c"], ["c"]),
        ({"a": "foo"}, None, None),
        ({"a": "foo"}, "bar", "bar"),
        ({"e": None}, {"a": 1}, {"e": None, "a": 1}),
        ([1, 2], {"a": "b", "c": None}, {"a": "b"}),
        ({}, {"a": {"bb": {"ccc": None}}}, {"a": {"bb": {}}}),
    ],
)
def test_merge_rfc_cases(doc, patch, expected):
    assert merge(doc, patch) == expected


def test_merge_does_not_alias_patch():
    patch = {"a": [1, 2]}
    result = merge({}, patch)
    result["a"].append(3)
    assert patch == {"a": [1, 2]}