"""Header carrier over an ALB request event.

ALB delivers headers either as a single-value map or, when multi-value
headers are enabled on the target group, as a map of lists. Lookups are
case-insensitive against both and never raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry.propagators.textmap import Getter

if TYPE_CHECKING:
    from budxray.models import AlbRequest


class HeaderCarrier:
    """Read-only, case-insensitive view of an ALB request's headers.

    Example:
        >>> carrier = HeaderCarrier(AlbRequest(headers={"x-amzn-trace-id": "Root=..."}))
        >>> carrier.get("X-Amzn-Trace-Id")
        'Root=...'
    """

    def __init__(self, request: AlbRequest | None) -> None:
        self._request = request

    def get(self, key: str) -> str | None:
        """Look a header up by name, ignoring case.

        Single-value headers are searched first. Failing that, the first
        multi-value entry whose name matches supplies its first element.

        Args:
            key: Header name in any casing.

        Returns:
            The header value, or None when absent.
        """
        if self._request is None or key is None:
            return None

        wanted = key.lower()
        headers = self._request.headers
        if headers:
            for name, value in headers.items():
                if name.lower() == wanted:
                    return value

        multi_value_headers = self._request.multi_value_headers
        if multi_value_headers:
            for name, values in multi_value_headers.items():
                if name.lower() == wanted:
                    return values[0] if values else None
        return None

    def keys(self) -> list[str]:
        """Names of the single-value headers."""
        if self._request is None or not self._request.headers:
            return []
        return list(self._request.headers.keys())


class AlbHeaderGetter(Getter[HeaderCarrier]):
    """Adapts HeaderCarrier to the OTEL text map ``Getter`` interface."""

    def get(self, carrier: HeaderCarrier | None, key: str) -> list[str] | None:
        if carrier is None:
            return None
        value = carrier.get(key)
        return [value] if value is not None else None

    def keys(self, carrier: HeaderCarrier | None) -> list[str]:
        if carrier is None:
            return []
        return carrier.keys()


ALB_HEADER_GETTER = AlbHeaderGetter()
