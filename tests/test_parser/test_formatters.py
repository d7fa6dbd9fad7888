"""Tests for specflat.parser.formatters."""

from __future__ import annotations

import re

import pytest

from specflat.exceptions import InvalidUsageError
from specflat.parser.formatters import (
    ExpressFormatter,
    RouteFormatter,
    SegmentResourceFormatter,
    build_formatter,
)


class TestRouteFormatter:
    def test_identity_by_default(self) -> None:
        formatter = RouteFormatter()
        assert formatter.format_path("/persons/{id}") == "/persons/{id}"
        assert formatter.format_resource("/persons/{id}") == "/persons/{id}"

    def test_callables_are_applied(self) -> None:
        def to_express(path: str) -> str:
            return path.replace("{", ":").replace("}", "") + "-route"

        def first_segment(path: str) -> str:
            return re.match(r"^/*([^/]+)", path).group(1) + "-resource"

        formatter = RouteFormatter(path_formatter=to_express, resource_formatter=first_segment)
        assert formatter.format_path("/persons/{id}") == "/persons/:id-route"
        assert formatter.format_resource("/persons/{id}") == "persons-resource"

    def test_only_one_callable(self) -> None:
        formatter = RouteFormatter(resource_formatter=str.upper)
        assert formatter.format_path("/a") == "/a"
        assert formatter.format_resource("/a") == "/A"


class TestPresets:
    def test_express_path(self) -> None:
        formatter = ExpressFormatter()
        assert formatter.format_path("/pets/{petId}/toys/{toyId}") == "/pets/:petId/toys/:toyId"
        assert formatter.format_resource("/pets/{petId}") == "/pets/{petId}"

    def test_segment_resource(self) -> None:
        formatter = SegmentResourceFormatter()
        assert formatter.format_resource("/pets/{petId}") == "pets"
        assert formatter.format_resource("//pets") == "pets"
        assert formatter.format_path("/pets/{petId}") == "/pets/{petId}"

    def test_segment_resource_root_path(self) -> None:
        assert SegmentResourceFormatter().format_resource("/") == "/"


class TestBuildFormatter:
    def test_defaults_are_identity(self) -> None:
        formatter = build_formatter()
        assert formatter.format_path("/a/{b}") == "/a/{b}"
        assert formatter.format_resource("/a/{b}") == "/a/{b}"

    def test_express_and_segment(self) -> None:
        formatter = build_formatter("express", "segment")
        assert formatter.format_path("/a/{b}") == "/a/:b"
        assert formatter.format_resource("/a/{b}") == "a"

    def test_unknown_path_style(self) -> None:
        with pytest.raises(InvalidUsageError, match="path style"):
            build_formatter("flask", "path")

    def test_unknown_resource_style(self) -> None:
        with pytest.raises(InvalidUsageError, match="resource style"):
            build_formatter("raw", "tag")
