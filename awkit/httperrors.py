"""HTTP error responses and helpers shared by the endpoints."""

from __future__ import annotations

import json
from collections.abc import Iterable
from http import HTTPStatus

SETTINGS_PREFIX = "settings."
MAX_KEY_LENGTH = 128


class HttpError(Exception):
    """An error answered with a status code and a JSON message body."""

    def __init__(self, status: HTTPStatus | int, message: str) -> None:
        super().__init__(message)
        self.status = HTTPStatus(status)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_json(self) -> str:
        """Return the response body; the status is not part of it."""
        return json.dumps({"message": self.message}, separators=(",", ":"), ensure_ascii=False)


def export_content_disposition(bucket_ids: Iterable[str]) -> str:
    """Return the Content-Disposition header of an export of these buckets."""
    ids = list(bucket_ids)
    if len(ids) == 1:
        return f"attachment; filename=aw-bucket-export_{ids[0]}.json"
    return "attachment; filename=aw-buckets-export.json"


def parse_setting_key(key: str) -> str:
    """Return the stored name of a setting key, rejecting keys that are too long."""
    if len(key.encode("utf-8")) >= MAX_KEY_LENGTH:
        raise HttpError(HTTPStatus.BAD_REQUEST, "Too long key")
    return SETTINGS_PREFIX + key


def strip_setting_prefix(key: str) -> str:
    """Turn a stored setting name back into the key clients use."""
    return key.removeprefix(SETTINGS_PREFIX)