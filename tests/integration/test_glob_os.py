"""glob() against the host filesystem."""
import os
import sys

import pytest

from fileglob import (
    DirectoryMatchMode,
    NotFoundError,
    OSFileSystem,
    glob,
    quote_meta,
)

FILES = [
    "glob_test.go",
    "prefix_test.go",
    "glob.go",
    ".github/workflows/ci.yml",
    "pkg/a/x.go",
    "pkg/b/y.go",
]

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX path semantics")


@pytest.fixture
def tree(make_os_tree, monkeypatch):
    root = make_os_tree(FILES)
    monkeypatch.chdir(root)
    return root


def abs_pattern(root, rest):
    return quote_meta(str(root).replace(os.sep, "/")) + "/" + rest


def test_relative_pattern_in_working_directory(tree):
    assert glob("*_test.go") == ["glob_test.go", "prefix_test.go"]


def test_dot_slash_prefix_is_stripped(tree):
    assert glob("./*_test.go") == ["glob_test.go", "prefix_test.go"]


def test_explicit_os_provider(tree):
    fs = OSFileSystem(str(tree / "pkg"))
    assert glob("*/*.go", fs=fs) == ["a/x.go", "b/y.go"]


def test_match_hidden_directory_as_leaf(tree):
    assert glob(".github", directory_mode=DirectoryMatchMode.AS_LEAF) == [".github"]


def test_trailing_separator_as_leaf(tree):
    matches = glob(".github/workflows/", directory_mode=DirectoryMatchMode.AS_LEAF)
    assert matches == [".github/workflows"]


def test_expand_directory(tree):
    assert glob("pkg") == ["pkg/a/x.go", "pkg/b/y.go"]


def test_missing_literal_raises(tree):
    with pytest.raises(NotFoundError):
        glob("nope.go")


@posix_only
def test_absolute_pattern(tree):
    root = str(tree)
    assert glob(abs_pattern(tree, "*_test.go")) == [
        root + "/glob_test.go",
        root + "/prefix_test.go",
    ]


@posix_only
def test_absolute_direct_file(tree):
    target = str(tree / "glob.go")
    assert glob(quote_meta(target)) == [target]


@posix_only
def test_absolute_pattern_ignores_provider_root(tree):
    fs = OSFileSystem(str(tree / "pkg"))
    assert glob(abs_pattern(tree, "glob.go"), fs=fs) == [str(tree / "glob.go")]


@posix_only
def test_maybe_root_fs_resolves_parent_relative_pattern(tree, monkeypatch):
    monkeypatch.chdir(tree / "pkg")
    assert glob("../*_test.go", maybe_root_fs=True) == [
        str(tree / "glob_test.go"),
        str(tree / "prefix_test.go"),
    ]


@posix_only
def test_maybe_root_fs_with_quote_meta_reports_missing_literal(tree, monkeypatch):
    monkeypatch.chdir(tree / "pkg")
    with pytest.raises(NotFoundError) as exc_info:
        glob("../{file}[", maybe_root_fs=True, quote_meta=True)
    assert exc_info.value.path == str(tree / "{file}[")


def test_maybe_root_fs_leaves_local_patterns_alone(tree):
    assert glob("./*_test.go", maybe_root_fs=True) == ["glob_test.go", "prefix_test.go"]


@posix_only
def test_symlink_to_directory(tree):
    os.symlink("pkg", tree / "link")
    assert glob("link", directory_mode=DirectoryMatchMode.AS_LEAF) == ["link"]
    assert glob("link") == ["link/a/x.go", "link/b/y.go"]


@posix_only
def test_symlinked_directories_are_not_followed_during_walk(tree):
    os.symlink("pkg", tree / "link")
    assert glob("*/a/*.go") == ["pkg/a/x.go"]


@posix_only
def test_broken_symlink_is_a_direct_match(tree):
    os.symlink("non-existent", tree / "broken")
    assert glob("broken") == ["broken"]
