"""Tests for riverspec.resolve: reference expansion in spec attributes."""

import pytest

from riverspec.resolve import Resolver, has_refs

STATE_REFS = {
    "service": {"web": {"id": "17", "name": "web"}},
    "origin": {"main": {"id": "4", "https_port": 443, "verify_tls": True}},
    "var": {"region": "eu"},
}


class TestHasRefs:
    @pytest.mark.parametrize(
        "value",
        [
            "${service.web.id}",
            "web-${var.region}",
            {"service": "${service.web.id}"},
            {"mappings": [{"target_id": "${origin.main.id}"}]},
        ],
    )
    def test_detects(self, value):
        assert has_refs(value)

    @pytest.mark.parametrize(
        "value",
        ["plain", "$${escaped}", "${{ not.a.ref }}", 42, None, {"a": ["b", 1]}],
    )
    def test_ignores(self, value):
        assert not has_refs(value)


class TestResolveRef:
    def test_state_reference(self):
        assert Resolver(STATE_REFS)._resolve_ref("service.web.id") == "17"

    def test_getattr_fallback(self):
        class Settings:
            region = "us-east-1"

        assert Resolver({"settings": Settings()})._resolve_ref("settings.region") == "us-east-1"

    def test_undefined_label(self):
        with pytest.raises(ValueError, match="undefined reference 'service.api.id'"):
            Resolver(STATE_REFS)._resolve_ref("service.api.id")

    def test_undefined_kind(self):
        with pytest.raises(ValueError, match="domain"):
            Resolver(STATE_REFS)._resolve_ref("domain.www.id")

    def test_callable_leaf_is_invoked(self):
        assert Resolver({"CWD": lambda: "/srv/cdn"})._resolve_ref("CWD") == "/srv/cdn"

    def test_callable_not_invoked_midway(self):
        with pytest.raises(ValueError, match="CWD.parent"):
            Resolver({"CWD": lambda: "/srv"})._resolve_ref("CWD.parent")


class TestResolveValue:
    def test_plain(self):
        assert Resolver(STATE_REFS)._resolve_value("origin.example.com") == "origin.example.com"

    def test_whole_reference_keeps_type(self):
        r = Resolver(STATE_REFS)
        assert r._resolve_value("${origin.main.https_port}") == 443
        assert r._resolve_value("${origin.main.verify_tls}") is True

    def test_embedded_reference_stringifies(self):
        assert Resolver(STATE_REFS)._resolve_value("port-${origin.main.https_port}") == "port-443"

    def test_multiple_references(self):
        r = Resolver(STATE_REFS)
        assert r._resolve_value("${service.web.name}.${var.region}") == "web.eu"

    def test_whitespace_inside_braces(self):
        assert Resolver(STATE_REFS)._resolve_value("${ service.web.id }") == "17"

    def test_escape(self):
        assert Resolver(STATE_REFS)._resolve_value("$${service.web.id}") == "${service.web.id}"

    def test_double_brace_left_alone(self):
        r = Resolver({"secrets": {"TOKEN": "leaked"}})
        assert r._resolve_value("${{ secrets.TOKEN }}") == "${{ secrets.TOKEN }}"

    def test_undefined(self):
        with pytest.raises(ValueError, match="undefined reference"):
            Resolver({})._resolve_value("${service.web.id}")


class TestResolve:
    def test_nested_structures(self):
        attrs = {
            "service": "${service.web.id}",
            "mappings": [{"target_id": "${origin.main.id}", "path_pattern": "/*"}],
            "aliases": ["${var.region}.example.com"],
        }
        assert Resolver(STATE_REFS).resolve(attrs) == {
            "service": "17",
            "mappings": [{"target_id": "4", "path_pattern": "/*"}],
            "aliases": ["eu.example.com"],
        }

    def test_non_strings_untouched(self):
        attrs = {"https_port": 8443, "verify_tls": False, "timeout_ms": None}
        assert Resolver(STATE_REFS).resolve(attrs) == attrs

    def test_input_not_mutated(self):
        attrs = {"service": "${service.web.id}"}
        Resolver(STATE_REFS).resolve(attrs)
        assert attrs == {"service": "${service.web.id}"}

    def test_empty(self):
        assert Resolver().resolve({}) == {}
