"""Tests for the object graph (nodes, arena, handles)."""

import copy
import gc

import pytest

from xaos.graph.handle import (
    ProtoObject,
    ancestors,
    has_own,
    is_anonymous,
    lookup,
    node_of,
    own_members,
    parent_of,
    wrap,
)
from xaos.graph.models import MISSING, Arena


def _chain_of_three(arena: Arena):
    root = arena.new_node(label="root")
    middle = arena.new_node(root, anonymous=True)
    leaf = arena.new_node(middle)
    middle.owner_id = leaf.id
    return root, middle, leaf


# --- Node / Arena Tests ---


def test_arena_allocates_increasing_ids():
    arena = Arena("ids")
    first = arena.new_node()
    second = arena.new_node()
    assert second.id > first.id
    assert arena.get(first.id) is first
    assert first.id in arena
    assert len(arena) == 2


def test_arena_tracks_nodes_weakly():
    arena = Arena("weak")
    node = arena.new_node()
    node_id = node.id
    del node
    gc.collect()
    assert arena.get(node_id) is None
    assert len(arena) == 0


def test_arena_rejects_foreign_parent():
    parent = Arena("a").new_node()
    with pytest.raises(ValueError):
        Arena("b").new_node(parent)


def test_node_chain_and_depth():
    root, middle, leaf = _chain_of_three(Arena())
    assert list(leaf.chain()) == [leaf, middle, root]
    assert leaf.depth() == 2
    assert root.is_root
    assert not leaf.is_root


def test_node_resolve_walks_parents():
    root, middle, leaf = _chain_of_three(Arena())
    root.members["greeting"] = "hello"
    middle.members["mixed"] = 1
    assert leaf.resolve("greeting") == "hello"
    assert leaf.resolve("mixed") == 1
    assert leaf.resolve("missing") is MISSING
    assert leaf.resolve("missing", None) is None


def test_node_resolve_prefers_nearest():
    root, middle, leaf = _chain_of_three(Arena())
    root.members["value"] = "root"
    leaf.members["value"] = "leaf"
    assert leaf.resolve("value") == "leaf"
    assert middle.resolve("value") == "root"


def test_node_own_layer():
    root, middle, leaf = _chain_of_three(Arena())
    assert leaf.own_layer is middle
    assert leaf.owns_layer(middle)
    assert root.own_layer is None
    assert middle.own_layer is None


# --- Handle Tests ---


def test_handle_setattr_writes_own_member():
    root, _, leaf = _chain_of_three(Arena())
    obj = wrap(leaf)
    obj.name = "leaf"
    assert leaf.members["name"] == "leaf"
    assert "name" not in root.members


def test_handle_getattr_resolves_inherited():
    root, _, leaf = _chain_of_three(Arena())
    root.members["color"] = "red"
    assert wrap(leaf).color == "red"


def test_handle_missing_member_is_attribute_error():
    obj = wrap(Arena().new_node())
    with pytest.raises(AttributeError):
        obj.nothing_here
    assert not hasattr(obj, "nothing_here")


def test_handle_item_access():
    obj = wrap(Arena().new_node())
    obj[1] = "a"
    assert obj[1] == "a"
    assert 1 in obj
    assert 2 not in obj
    with pytest.raises(KeyError):
        obj[2]
    del obj[1]
    assert 1 not in obj


def test_handle_delattr_only_removes_own():
    root, _, leaf = _chain_of_three(Arena())
    root.members["shared"] = True
    obj = wrap(leaf)
    obj.local = True
    del obj.local
    assert not has_own(obj, "local")
    with pytest.raises(AttributeError):
        del obj.shared
    assert obj.shared is True


def test_handle_reserved_slot():
    obj = wrap(Arena().new_node())
    with pytest.raises(AttributeError):
        obj._node = None


def test_handle_equality_follows_node_identity():
    node = Arena().new_node()
    assert wrap(node) == wrap(node)
    assert wrap(node) != wrap(Arena().new_node())
    assert len({wrap(node), wrap(node)}) == 1
    assert wrap(node) != "node"


def test_handle_binds_functions_to_receiver():
    root, _, leaf = _chain_of_three(Arena())
    root.members["whoami"] = lambda self: self
    obj = wrap(leaf)
    assert obj.whoami() == obj
    assert wrap(root).whoami() == wrap(root)


def test_handle_unwraps_staticmethod():
    obj = wrap(Arena().new_node())
    obj.add = staticmethod(lambda a, b: a + b)
    assert obj.add(2, 3) == 5


def test_handle_binds_classmethod_to_receiver():
    obj = wrap(Arena().new_node())
    obj.whoami = classmethod(lambda cls: cls)
    assert obj.whoami() == obj


def test_handle_does_not_bind_builtins():
    obj = wrap(Arena().new_node())
    obj.size = len
    assert obj.size([1, 2]) == 2


def test_handle_copy_shares_node():
    obj = wrap(Arena().new_node())
    obj.items = [1, 2]
    shallow = copy.copy(obj)
    deep = copy.deepcopy(obj)
    assert shallow == obj
    assert deep == obj
    assert node_of(deep) is node_of(obj)
    deep.extra = "shared"
    assert obj.extra == "shared"


def test_handle_repr_and_dir():
    root, middle, leaf = _chain_of_three(Arena())
    root.members["inherited"] = 1
    leaf.members["own"] = 2
    leaf.members[3] = "not a name"
    assert f"#{leaf.id}" in repr(wrap(leaf))
    assert "root" in repr(wrap(root))
    assert "anonymous" in repr(wrap(middle))
    names = dir(wrap(leaf))
    assert "inherited" in names
    assert "own" in names


# --- Introspection Tests ---


def test_has_own_and_own_members():
    root, _, leaf = _chain_of_three(Arena())
    root.members["inherited"] = 1
    obj = wrap(leaf)
    obj.own = 2
    assert has_own(obj, "own")
    assert not has_own(obj, "inherited")

    snapshot = own_members(obj)
    assert snapshot == {"own": 2}
    snapshot["extra"] = 3
    assert not has_own(obj, "extra")


def test_lookup_default_and_binding():
    root, _, leaf = _chain_of_three(Arena())
    root.members["me"] = lambda self: self
    obj = wrap(leaf)
    assert lookup(obj, "missing") is None
    assert lookup(obj, "missing", 42) == 42
    assert lookup(obj, "me")() == obj


def test_parent_of_and_ancestors():
    root, middle, leaf = _chain_of_three(Arena())
    obj = wrap(leaf)
    assert parent_of(obj) == wrap(middle)
    assert parent_of(wrap(root)) is None
    assert list(ancestors(obj)) == [wrap(middle), wrap(root)]
    assert is_anonymous(parent_of(obj))
    assert not is_anonymous(obj)


def test_node_of_rejects_non_handles():
    with pytest.raises(TypeError):
        node_of({"not": "a handle"})
    assert isinstance(wrap(Arena().new_node()), ProtoObject)
