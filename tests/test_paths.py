"""Tests for path rewriting and clean URLs."""

import logging

import pytest

from sitepager.pagination.paths import (
    clean_url,
    collapse_slashes,
    detail_path,
    rewrite_item_path,
    split_filename,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("blog/my-post.md", "blog/my-post/index.md"),
        ("blog/notes", "blog/notes/index.html"),
        ("blog/archive.tar.gz", "blog/archive.tar/index.gz"),
        ("blog/2024/trip.html", "blog/trip/index.html"),
    ],
)
def test_rewrite_item_path(path: str, expected: str) -> None:
    assert rewrite_item_path(path, "blog") == expected


def test_split_filename_defaults_extension() -> None:
    assert split_filename("blog/readme") == ("readme", ".html")
    assert split_filename("blog/post.md") == ("post", ".md")


def test_rewrite_of_index_file_nests_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="sitepager.pagination.paths"):
        first = rewrite_item_path("blog/index.md", "blog")

    assert first == "blog/index/index.md"
    assert "named index" in caplog.text
    # A second rewrite keeps the same shape instead of nesting deeper.
    assert rewrite_item_path(first, "blog") == first


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("blog/post/index.html", "/blog/post/"),
        ("/blog/index.html", "/blog/"),
        ("/about.md", "/about"),
        ("about.html", "/about"),
        ("blog/", "/blog"),
        ("/", "/"),
        ("feed.xml", "/feed.xml"),
    ],
)
def test_clean_url(path: str, expected: str) -> None:
    assert clean_url(path) == expected


def test_detail_path_trims_index_segment() -> None:
    assert detail_path("blog/post/index.md") == "/blog/post/"
    assert detail_path("blog/post/index.html") == "/blog/post/"
    assert detail_path("blog/post/index.txt") == "/blog/post/index.txt"


def test_collapse_slashes() -> None:
    assert collapse_slashes("//blog///2/") == "/blog/2/"
    assert collapse_slashes(None) is None
