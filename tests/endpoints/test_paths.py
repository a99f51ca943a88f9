"""Tests for path normalisation and concatenation."""

from __future__ import annotations

import pytest

from restmap.endpoints.core import join_paths, method_upper, normalize_path


@pytest.mark.parametrize(
    ("fragment", "expected"),
    [
        (None, ""),
        ("", ""),
        ("/", ""),
        ("  ", ""),
        ("api", "/api"),
        ("/api/", "/api"),
        ("//api//user/", "/api/user"),
        ("/users/{id}", "/users/{id}"),
    ],
)
def test_normalize_path(fragment, expected) -> None:
    assert normalize_path(fragment) == expected


def test_join_paths_has_single_separator() -> None:
    assert join_paths("/api/user", "/info") == "/api/user/info"
    assert join_paths("/api/user/", "info") == "/api/user/info"
    assert join_paths("api/user", "/info/") == "/api/user/info"


def test_join_paths_with_empty_method_fragment_is_type_fragment() -> None:
    assert join_paths("/api/user", "") == "/api/user"
    assert join_paths("/api/user", "/") == "/api/user"


def test_join_paths_without_type_fragment() -> None:
    assert join_paths(None, "/health") == "/health"
    assert join_paths("", "health") == "/health"


def test_join_paths_of_nothing_is_root() -> None:
    assert join_paths(None, "") == "/"
    assert join_paths("/", "/") == "/"


def test_method_upper_falls_back_to_request() -> None:
    assert method_upper("get") == "GET"
    assert method_upper(None) == "REQUEST"
    assert method_upper("  ") == "REQUEST"
