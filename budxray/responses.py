"""Construction of ALB response envelopes."""

from __future__ import annotations

import json

from pydantic import BaseModel

from budxray.commons.constants import (
    CONTENT_TYPE_HEADER,
    INTERNAL_ERROR_MESSAGE,
    JSON_CONTENT_TYPE,
    NOT_FOUND_MESSAGE,
    STATUS_DESCRIPTIONS,
)

from .models import AlbResponse, MessageResponse


def status_description(status_code: int) -> str:
    """ALB status line text for a status code, e.g. ``"404 Not Found"``."""
    return STATUS_DESCRIPTIONS.get(status_code, f"{status_code} Unknown")


class ResponseBuilder:
    """Builds JSON response envelopes.

    ALB only honours one of ``headers``/``multiValueHeaders`` depending on the
    target group setting, so both are always populated.
    """

    def build(self, status_code: int, body: str) -> AlbResponse:
        return AlbResponse(
            status_code=status_code,
            status_description=status_description(status_code),
            headers={CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE},
            multi_value_headers={CONTENT_TYPE_HEADER: [JSON_CONTENT_TYPE]},
            body=body,
            is_base64_encoded=False,
        )

    def json(self, status_code: int, payload: BaseModel | dict) -> AlbResponse:
        """Build an envelope whose body is the compact JSON rendering of ``payload``."""
        if isinstance(payload, BaseModel):
            body = payload.model_dump_json()
        else:
            body = json.dumps(payload, separators=(",", ":"))
        return self.build(status_code, body)

    def not_found(self) -> AlbResponse:
        return self.json(404, MessageResponse(message=NOT_FOUND_MESSAGE))

    def internal_error(self) -> AlbResponse:
        return self.json(500, MessageResponse(message=INTERNAL_ERROR_MESSAGE))
