"""Tests for the static route table."""

from __future__ import annotations

import pytest

from budxray.routing import Route, Router


def hello(request, span):
    return "hello"


def not_found(request, span):
    return "not-found"


@pytest.fixture
def router() -> Router:
    return Router([Route("/api/hello", hello)], fallback=not_found)


class TestRouter:
    """Tests for Router.route."""

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "get", ""])
    def test_hello_path_accepts_any_method(self, router: Router, method: str) -> None:
        assert router.route(method, "/api/hello") is hello

    @pytest.mark.parametrize("path", ["/anything/else", "/api/hello/", "/API/HELLO", "/api", "", "/unknown"])
    def test_other_paths_fall_back(self, router: Router, path: str) -> None:
        assert router.route("GET", path) is not_found

    def test_method_restricted_route(self) -> None:
        router = Router([Route("/api/hello", hello, methods=frozenset({"GET"}))], fallback=not_found)

        assert router.route("GET", "/api/hello") is hello
        assert router.route("get", "/api/hello") is hello
        assert router.route("POST", "/api/hello") is not_found


class TestHandlerRouteTable:
    """The handler's own table."""

    def test_hello_for_get_and_post(self, handler) -> None:
        assert handler._router.route("GET", "/api/hello") == handler._handle_hello
        assert handler._router.route("POST", "/api/hello") == handler._handle_hello

    def test_not_found_elsewhere(self, handler) -> None:
        assert handler._router.route("GET", "/anything/else") == handler._handle_not_found
