"""Request and response models for the ALB Lambda integration.

Field names are snake_case in Python and camelCase on the wire, matching the
event and response shapes ALB uses for Lambda targets.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601 with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class AlbRequest(BaseModel):
    """Inbound ALB event as delivered to the function."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    http_method: str = ""
    path: str = ""
    headers: Optional[Dict[str, str]] = None
    multi_value_headers: Optional[Dict[str, Optional[List[str]]]] = None
    query_string_parameters: Optional[Dict[str, str]] = None
    body: Optional[str] = None
    is_base64_encoded: bool = False

    @classmethod
    def from_event(cls, event: Any) -> AlbRequest:
        """Build a request from a raw event; anything that is not a mapping becomes an empty request."""
        if not isinstance(event, Mapping):
            return cls()
        return cls.model_validate(dict(event))


class AlbResponse(BaseModel):
    """Response envelope returned to ALB."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    status_description: str
    headers: Dict[str, str] = Field(default_factory=dict)
    multi_value_headers: Dict[str, List[str]] = Field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False

    def to_event(self) -> Dict[str, Any]:
        """Serialize to the dict shape the Lambda runtime hands back to ALB."""
        return self.model_dump(by_alias=True)


class MessageResponse(BaseModel):
    """Body of the error envelopes."""

    message: str


class HelloResponse(BaseModel):
    """Body of the hello endpoint."""

    message: str
    timestamp: str = Field(default_factory=utc_timestamp)
