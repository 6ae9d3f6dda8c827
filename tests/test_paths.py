"""Tests for resource path parsing and escaping."""

from urllib.parse import unquote

import pytest

from fbstorage import ResourcePath


class TestParse:
    def test_root_and_segments(self):
        path = ResourcePath.parse("some/path/to/file.png")
        assert path.root == "some"
        assert path.segments == ("path", "to", "file.png")
        assert path.canonical == "some/path/to/file.png"

    def test_empty_components_dropped(self):
        path = ResourcePath.parse("/a//b/")
        assert path.root == "a"
        assert path.segments == ("b",)
        assert str(path) == "a/b"

    @pytest.mark.parametrize("raw", ["", "   ", "/", "///"])
    def test_bucket_top_level(self, raw):
        path = ResourcePath.parse(raw)
        assert path.is_root
        assert path.canonical == ""
        assert path.listing_prefix is None

    def test_single_component(self):
        path = ResourcePath.parse("folder")
        assert path.canonical == "folder"
        assert path.name == "folder"
        assert path.listing_prefix == "folder/"

    def test_custom_delimiter(self):
        path = ResourcePath.parse("a::b::::c", delimiter="::")
        assert path.root == "a"
        assert path.segments == ("b", "c")
        assert path.canonical == "a::b::c"
        assert path.listing_prefix == "a::b::c::"

    def test_slash_is_plain_text_with_custom_delimiter(self):
        path = ResourcePath.parse("a/b|c", delimiter="|")
        assert path.root == "a/b"
        assert path.segments == ("c",)

    def test_empty_delimiter_rejected(self):
        with pytest.raises(ValueError):
            ResourcePath.parse("a/b", delimiter="")

    def test_invalid_direct_construction(self):
        with pytest.raises(ValueError):
            ResourcePath("a", ("", "b"))
        with pytest.raises(ValueError):
            ResourcePath("", ("b",))

    @pytest.mark.parametrize("raw", ["a//b/", "//x///y//z", "single", "", "a/ /b"])
    def test_canonicalization_is_idempotent(self, raw):
        once = ResourcePath.parse(raw)
        assert ResourcePath.parse(once.canonical) == once


class TestChild:
    def test_child_returns_new_path(self):
        parent = ResourcePath.parse("some")
        child = parent.child("path").child("to/file.png")
        assert parent.canonical == "some"
        assert child == ResourcePath.parse("some/path/to/file.png")

    def test_child_of_root(self):
        assert ResourcePath.parse("").child("top.txt").canonical == "top.txt"

    def test_empty_child_is_noop(self):
        path = ResourcePath.parse("a/b")
        assert path.child("//") is path


class TestEscaping:
    def test_delimiter_is_escaped(self):
        assert ResourcePath.parse("root/test.json").escaped == "root%2Ftest.json"

    @pytest.mark.parametrize(
        "raw",
        [
            "folder with spaces/file name.txt",
            "ünïcödé/日本語/файл.bin",
            "a+b/c&d=e/f?g#h",
            "percent%20literal/x",
        ],
    )
    def test_escaping_round_trip(self, raw):
        path = ResourcePath.parse(raw)
        assert "/" not in path.escaped
        assert " " not in path.escaped
        assert unquote(path.escaped) == path.canonical
