"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Tests for the endpoint catalog.
"""

import pytest

from fennec.api import ENDPOINTS, get_endpoint, namespaces
from fennec.exceptions import UnknownEndpointError
from fennec.request.endpoint import BodyUsage, PathPart


class TestCatalog:
    def test_names_are_unique(self):
        names = [e.name for e in ENDPOINTS]
        assert len(names) == len(set(names))

    def test_get_endpoint(self):
        endpoint = get_endpoint("indices.clear_cache")
        assert endpoint.method == "POST"
        assert endpoint.path == (PathPart("index"), "_cache", "clear")

    def test_unknown_endpoint(self):
        with pytest.raises(UnknownEndpointError):
            get_endpoint("indices.explode")

    def test_namespaces(self):
        grouped = namespaces()
        assert "search" in grouped[""]
        assert "refresh" in grouped["indices"]
        assert "health" in grouped["cluster"]
        assert set(grouped["cat"]) == {"indices", "health"}

    @pytest.mark.parametrize(
        "name, method",
        [
            ("info", "GET"),
            ("ping", "HEAD"),
            ("search", "GET"),
            ("index", "PUT"),
            ("exists", "HEAD"),
            ("delete", "DELETE"),
            ("bulk", "POST"),
            ("indices.create", "PUT"),
            ("indices.delete", "DELETE"),
            ("indices.exists", "HEAD"),
        ],
    )
    def test_methods(self, name, method):
        assert get_endpoint(name).method == method

    def test_write_endpoints_require_body(self):
        assert get_endpoint("index").body is BodyUsage.REQUIRED
        assert get_endpoint("bulk").body is BodyUsage.REQUIRED

    def test_read_endpoints_reject_body(self):
        assert get_endpoint("get").body is BodyUsage.NONE
        assert get_endpoint("cat.health").body is BodyUsage.NONE

    def test_search_declares_track_total_hits_as_free_form(self):
        from fennec.request.params import ParamKind

        param = get_endpoint("search").params["track_total_hits"]
        assert param.kind is ParamKind.FREE_FORM
