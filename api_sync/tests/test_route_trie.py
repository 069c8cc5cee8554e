import pytest

from api_sync.api_codegen.contract import RouteDescriptor
from api_sync.api_codegen.route_trie import (
    DYNAMIC_KEY,
    STREAM_METHOD_KEY,
    build_route_trie,
    normalize_prefix,
    path_segments,
    strip_prefix,
)


def route(method: str, path: str, **kwargs) -> RouteDescriptor:
    return RouteDescriptor(method=method, path=path, **kwargs)


class TestNormalizePrefix:
    @pytest.mark.parametrize(
        ("prefix", "expected"),
        [
            ("/api/v1", "/api/v1"),
            ("api/v1/", "/api/v1"),
            ("billingRestfulApi/", "/billingRestfulApi"),
            ("//api//", "/api"),
            ("/", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, prefix, expected):
        assert normalize_prefix(prefix) == expected


class TestStripPrefix:
    def test_strips_leading_match(self):
        assert strip_prefix("/api/v1/users", "/api/v1") == "/users"

    def test_leaves_non_matching_path(self):
        assert strip_prefix("/other/users", "/api/v1") == "/other/users"

    def test_empty_result_becomes_root(self):
        assert strip_prefix("/api/v1", "/api/v1") == "/"

    def test_no_prefix(self):
        assert strip_prefix("/users", "") == "/users"


class TestPathSegments:
    def test_drops_empty_segments(self):
        assert path_segments("//users///:id/") == ["users", ":id"]

    def test_root(self):
        assert path_segments("/") == []


class TestBuildRouteTrie:
    def test_methods_share_node(self):
        tree = build_route_trie([route("GET", "/users"), route("POST", "/users")])

        assert list(tree) == ["users"]
        assert list(tree["users"].methods) == ["get", "post"]

    def test_nested_dynamic_route(self):
        tree = build_route_trie([route("GET", "/users/:id"), route("DELETE", "/users/:id")])

        id_node = tree["users"].children[DYNAMIC_KEY]
        assert id_node.is_dynamic is True
        assert list(id_node.methods) == ["get", "delete"]
        assert tree["users"].is_dynamic is False
        assert not tree["users"].methods

    def test_dynamic_segments_are_canonicalized(self):
        tree = build_route_trie([route("GET", "/users/:userId"), route("GET", "/posts/:postId")])

        assert list(tree) == ["users", "posts"]
        assert list(tree["users"].children) == [DYNAMIC_KEY]
        assert list(tree["posts"].children) == [DYNAMIC_KEY]
        assert ":userId" not in tree["users"].children
        assert ":postId" not in tree["posts"].children

    def test_differently_named_params_collapse(self):
        tree = build_route_trie([route("GET", "/users/:userId"), route("PUT", "/users/:id")])

        assert list(tree["users"].children) == [DYNAMIC_KEY]
        assert list(tree["users"].children[DYNAMIC_KEY].methods) == ["get", "put"]

    def test_deeply_nested(self):
        tree = build_route_trie([route("GET", "/users/:userId/posts/:postId")])

        post_node = tree["users"].children[DYNAMIC_KEY].children["posts"].children[DYNAMIC_KEY]
        assert "get" in post_node.methods

    def test_method_is_lowercased(self):
        tree = build_route_trie([route("Patch", "/users")])
        assert list(tree["users"].methods) == ["patch"]

    def test_prefix_stripping(self):
        tree = build_route_trie([route("GET", "/api/v1/users"), route("POST", "/api/v1/users")], "/api/v1")

        assert list(tree) == ["users"]

    def test_prefix_stripping_with_trailing_separator(self):
        tree = build_route_trie([route("GET", "/billingRestfulApi/users")], "billingRestfulApi/")

        assert list(tree) == ["users"]

    def test_prefix_only_applies_to_leading_match(self):
        tree = build_route_trie([route("GET", "/health")], "/api/v1")
        assert list(tree) == ["health"]

    def test_root_route_is_skipped(self):
        assert len(build_route_trie([route("GET", "/")])) == 0

    def test_route_equal_to_prefix_is_skipped(self):
        assert len(build_route_trie([route("GET", "/api/v1")], "/api/v1")) == 0

    def test_streaming_route_uses_reserved_key(self):
        tree = build_route_trie([route("GET", "/events", sse=True), route("GET", "/events")])

        assert list(tree["events"].methods) == [STREAM_METHOD_KEY, "get"]

    def test_collision_last_write_wins(self):
        first = route("GET", "/users/:id", description="first")
        second = route("GET", "/users/:userId", description="second")
        other = route("DELETE", "/users/:id")
        tree = build_route_trie([first, other, second])

        methods = tree["users"].children[DYNAMIC_KEY].methods
        assert methods["get"] is second
        assert list(methods) == ["get", "delete"]

    def test_methods_and_children_are_independent(self):
        tree = build_route_trie([route("GET", "/users/get"), route("GET", "/users")])

        assert "get" in tree["users"].methods
        assert "get" in tree["users"].children

    def test_insertion_order_is_preserved(self):
        tree = build_route_trie([route("GET", "/zeta"), route("GET", "/alpha"), route("GET", "/mid")])
        assert list(tree) == ["zeta", "alpha", "mid"]

    def test_tree_is_read_only(self):
        tree = build_route_trie([route("GET", "/users")])

        with pytest.raises(TypeError):
            tree["posts"] = tree["users"]
        with pytest.raises(TypeError):
            tree["users"].methods["post"] = route("POST", "/users")

    def test_each_build_is_fresh(self):
        routes = [route("GET", "/users")]
        first = build_route_trie(routes)
        second = build_route_trie(routes)

        assert first is not second
        assert first["users"] is not second["users"]
        assert first["users"].methods["get"] is second["users"].methods["get"]
