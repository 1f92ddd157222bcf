"""Tests for crumbs.http.headers — mutable, case-insensitive MutableHeaders."""

from crumbs._internal.protocols import HeaderStore
from crumbs.http.headers import MutableHeaders


class TestMutableHeaders:
    def test_get(self) -> None:
        h = MutableHeaders([("Content-Type", "text/html")])
        assert h.get("Content-Type") == "text/html"

    def test_case_insensitive(self) -> None:
        h = MutableHeaders([("Content-Type", "text/html")])
        assert h.get("content-type") == "text/html"
        assert h.get("CONTENT-TYPE") == "text/html"

    def test_get_missing_returns_default(self) -> None:
        h = MutableHeaders()
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_get_joins_occurrences(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        assert h.get("set-cookie") == "a=1, b=2"

    def test_get_list(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1"), ("Accept", "*/*"), ("Set-Cookie", "b=2")])
        assert h.get_list("Set-Cookie") == ["a=1", "b=2"]
        assert h.get_list("x-missing") == []

    def test_from_mapping(self) -> None:
        h = MutableHeaders({"Cookie": "a=1", "Accept": "*/*"})
        assert h.get("cookie") == "a=1"
        assert len(h) == 2

    def test_set_replaces_all_occurrences(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        h.set("set-cookie", "c=3")
        assert h.get_list("Set-Cookie") == ["c=3"]

    def test_append_adds_occurrence(self) -> None:
        h = MutableHeaders()
        h.append("Set-Cookie", "a=1")
        h.append("set-cookie", "b=2")
        assert h.get_list("set-cookie") == ["a=1", "b=2"]

    def test_delete(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1"), ("Accept", "*/*")])
        h.delete("SET-COOKIE")
        assert "set-cookie" not in h
        assert "accept" in h

    def test_delete_missing_ignored(self) -> None:
        h = MutableHeaders()
        h.delete("x-missing")
        assert len(h) == 0

    def test_contains_rejects_non_str(self) -> None:
        h = MutableHeaders([("Accept", "*/*")])
        assert 42 not in h  # type: ignore[operator]

    def test_iter_yields_unique_lowercase_keys(self) -> None:
        h = MutableHeaders([("Accept", "*/*"), ("Content-Type", "text/html"), ("Accept", "text/xml")])
        assert list(h) == ["accept", "content-type"]

    def test_len_deduplicates(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        assert len(h) == 1

    def test_items_keeps_occurrences(self) -> None:
        pairs = [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
        assert MutableHeaders(pairs).items() == pairs

    def test_sanitizes_crlf(self) -> None:
        h = MutableHeaders()
        h.set("X-Test", "a\r\nInjected: 1")
        assert h.get("x-test") == "aInjected: 1"

    def test_from_raw(self) -> None:
        h = MutableHeaders.from_raw(((b"cookie", b"a=1"), (b"Accept", b"*/*")))
        assert h.get("Cookie") == "a=1"
        assert h.get("accept") == "*/*"

    def test_raw_lowercases_names(self) -> None:
        h = MutableHeaders([("Set-Cookie", "a=1")])
        assert h.raw() == ((b"set-cookie", b"a=1"),)

    def test_repr(self) -> None:
        h = MutableHeaders([("Accept", "*/*")])
        assert "accept" in repr(h)

    def test_satisfies_header_store(self) -> None:
        assert isinstance(MutableHeaders(), HeaderStore)
