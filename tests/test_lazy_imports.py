"""Tests for the lazy top-level ``perch`` namespace."""

import pytest

import perch


class TestLazyImports:
    def test_every_public_name_resolves(self) -> None:
        for name in perch.__all__:
            assert getattr(perch, name) is not None

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="nope"):
            perch.nope  # noqa: B018
