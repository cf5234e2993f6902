"""Tests for the case-insensitive ALB header carrier."""

from __future__ import annotations

import pytest

from budxray.models import AlbRequest
from budxray.tracing.carrier import ALB_HEADER_GETTER, HeaderCarrier


TRACE_HEADER = "Root=1-67890abc-12345678901234567890abcd;Parent=1234567890abcdef;Sampled=1"


class TestHeaderCarrier:
    """Tests for HeaderCarrier.get and HeaderCarrier.keys."""

    @pytest.mark.parametrize("lookup", ["X-Amzn-Trace-Id", "x-amzn-trace-id", "X-AMZN-TRACE-ID", "x-AmZn-TrAcE-iD"])
    def test_single_value_lookup_ignores_case(self, lookup: str) -> None:
        carrier = HeaderCarrier(AlbRequest(headers={"x-amzn-trace-id": TRACE_HEADER}))
        assert carrier.get(lookup) == TRACE_HEADER

    @pytest.mark.parametrize("stored", ["X-Amzn-Trace-Id", "x-amzn-trace-id", "X-AMZN-TRACE-ID"])
    def test_multi_value_lookup_ignores_case(self, stored: str) -> None:
        carrier = HeaderCarrier(AlbRequest(multi_value_headers={stored: [TRACE_HEADER, "second"]}))
        assert carrier.get("x-amzn-trace-id") == TRACE_HEADER

    def test_single_value_wins_over_multi_value(self) -> None:
        carrier = HeaderCarrier(
            AlbRequest(
                headers={"X-Amzn-Trace-Id": "single"},
                multi_value_headers={"X-Amzn-Trace-Id": ["multi"]},
            )
        )
        assert carrier.get("x-amzn-trace-id") == "single"

    def test_multi_value_returns_first_element(self) -> None:
        carrier = HeaderCarrier(AlbRequest(multi_value_headers={"Accept": ["text/html", "application/json"]}))
        assert carrier.get("accept") == "text/html"

    def test_empty_multi_value_list_is_absent(self) -> None:
        carrier = HeaderCarrier(AlbRequest(multi_value_headers={"X-Amzn-Trace-Id": []}))
        assert carrier.get("X-Amzn-Trace-Id") is None

    def test_null_multi_value_list_is_absent(self) -> None:
        carrier = HeaderCarrier(AlbRequest(multi_value_headers={"X-Amzn-Trace-Id": None}))
        assert carrier.get("X-Amzn-Trace-Id") is None

    def test_missing_header_is_absent(self) -> None:
        carrier = HeaderCarrier(AlbRequest(headers={"Host": "example.com"}, multi_value_headers={}))
        assert carrier.get("X-Amzn-Trace-Id") is None

    def test_absent_request_and_maps(self) -> None:
        assert HeaderCarrier(None).get("X-Amzn-Trace-Id") is None
        assert HeaderCarrier(AlbRequest()).get("X-Amzn-Trace-Id") is None
        assert HeaderCarrier(None).get(None) is None

    def test_keys_lists_single_value_names(self) -> None:
        carrier = HeaderCarrier(
            AlbRequest(headers={"Host": "example.com", "X-Amzn-Trace-Id": TRACE_HEADER}, multi_value_headers={"Accept": ["*/*"]})
        )
        assert set(carrier.keys()) == {"Host", "X-Amzn-Trace-Id"}

    def test_keys_empty_without_headers(self) -> None:
        assert HeaderCarrier(None).keys() == []
        assert HeaderCarrier(AlbRequest()).keys() == []


class TestAlbHeaderGetter:
    """Tests for the OTEL Getter adapter."""

    def test_get_wraps_value_in_list(self) -> None:
        carrier = HeaderCarrier(AlbRequest(headers={"x-amzn-trace-id": TRACE_HEADER}))
        assert ALB_HEADER_GETTER.get(carrier, "X-Amzn-Trace-Id") == [TRACE_HEADER]

    def test_get_absent_returns_none(self) -> None:
        assert ALB_HEADER_GETTER.get(HeaderCarrier(AlbRequest()), "X-Amzn-Trace-Id") is None
        assert ALB_HEADER_GETTER.get(None, "X-Amzn-Trace-Id") is None

    def test_keys(self) -> None:
        carrier = HeaderCarrier(AlbRequest(headers={"Host": "example.com"}))
        assert ALB_HEADER_GETTER.keys(carrier) == ["Host"]
        assert ALB_HEADER_GETTER.keys(None) == []
