"""Tests for page window construction."""

import pytest

from postboard.services.pagination import (
    MAX_WINDOW_VALUE,
    PageWindow,
    build_page_window,
    parse_page_param,
)


@pytest.mark.parametrize(
    ("page", "page_size", "expected"),
    [
        (1, 10, PageWindow(skip=0, limit=10)),
        (3, 10, PageWindow(skip=20, limit=10)),
        ("2", "5", PageWindow(skip=5, limit=5)),
        ("2abc", "5", PageWindow(skip=5, limit=5)),
    ],
)
def test_valid_window(page, page_size, expected):
    assert build_page_window(page, page_size) == expected


@pytest.mark.parametrize(
    ("page", "page_size"),
    [
        (None, None),
        (None, 10),
        (1, None),
        (0, 10),
        (1, 0),
        (-2, 10),
        (1, -5),
        ("abc", "10"),
        ("", "10"),
    ],
)
def test_pagination_disabled(page, page_size):
    assert build_page_window(page, page_size) is None


def test_parse_page_param():
    assert parse_page_param(" 7 ") == 7
    assert parse_page_param("3.9") == 3
    assert parse_page_param("x3") is None
    assert parse_page_param(None) is None


def test_huge_page_is_clamped():
    assert build_page_window("99999999999999999999", "10") == PageWindow(
        skip=MAX_WINDOW_VALUE, limit=10
    )
    assert build_page_window(2**70, 10) == PageWindow(skip=MAX_WINDOW_VALUE, limit=10)


def test_huge_page_size_is_clamped():
    assert build_page_window("1", "99999999999999999999") == PageWindow(
        skip=0, limit=MAX_WINDOW_VALUE
    )


def test_parse_very_long_digit_string():
    assert parse_page_param("9" * 5000) == MAX_WINDOW_VALUE
    assert parse_page_param("-" + "9" * 5000) == -MAX_WINDOW_VALUE
