"""Unit tests for pagination primitives."""

from __future__ import annotations

import pytest

from mp_search.application.pagination import PageRequest


class TestPageRequest:
    def test_defaults(self) -> None:
        pr = PageRequest()
        assert pr.page == 1
        assert pr.size == 20

    def test_offset(self) -> None:
        pr = PageRequest(page=3, size=10)
        assert pr.offset == 20  # (3-1)*10
        assert pr.limit == 10

    def test_page_zero_raises(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(page=0)

    def test_size_zero_raises(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(size=0)

    def test_frozen(self) -> None:
        pr = PageRequest()
        with pytest.raises(AttributeError):
            pr.page = 2  # type: ignore[misc]
