"""Tests for pagination URL generation."""

from sitepager.pagination.urls import generate_pagination_urls, resolve_pattern


def test_resolve_pattern_substitutes_placeholders() -> None:
    assert resolve_pattern(":directory/:num", "blog", 3) == "blog/3"
    assert resolve_pattern(":directory/page/:num", "news", 2) == "news/page/2"


def test_permalink_first_page_has_no_previous() -> None:
    links = generate_pagination_urls("blog", "blog/:num", 1, 3, True)

    assert links.previous is None
    assert links.next == "/blog/2/"
    assert links.first == "/blog/"
    assert links.last == "/blog/3/"


def test_permalink_second_page_links_back_to_first() -> None:
    links = generate_pagination_urls("blog", "blog/:num", 2, 3, True)

    assert links.previous == links.first == "/blog/"
    assert links.next == "/blog/3/"


def test_permalink_middle_and_last_pages() -> None:
    middle = generate_pagination_urls("blog", ":directory/:num", 3, 4, True)
    last = generate_pagination_urls("blog", ":directory/:num", 4, 4, True)

    assert middle.previous == "/blog/2/"
    assert middle.next == "/blog/4/"
    assert last.next is None
    assert last.previous == "/blog/3/"
    assert last.last == "/blog/4/"


def test_single_page_has_no_neighbours() -> None:
    links = generate_pagination_urls("blog", ":directory/:num", 1, 1, True)

    assert links.next is None
    assert links.previous is None
    assert links.last == "/blog/1/"


def test_permalink_collapses_duplicate_slashes() -> None:
    links = generate_pagination_urls("blog", "/:directory//page/:num/", 2, 3, True)

    assert links.next == "/blog/page/3/"
    assert links.last == "/blog/page/3/"
    assert links.previous == "/blog/"


def test_flat_scheme_last_page() -> None:
    links = generate_pagination_urls("blog", ":directory/:num", 2, 2, False)

    assert links.next is None
    assert links.previous == "/blog.html"
    assert links.first == "/blog.html"
    assert links.last == "/blog/2.html"


def test_flat_scheme_keeps_extensions() -> None:
    links = generate_pagination_urls("blog", ":directory/:num", 3, 4, False)

    assert links.previous == "/blog/2.html"
    assert links.next == "/blog/4.html"


def test_flat_scheme_first_page_has_no_previous() -> None:
    links = generate_pagination_urls("blog", "/:directory/:num", 1, 2, False)

    assert links.previous is None
    assert links.next == "/blog/2.html"
