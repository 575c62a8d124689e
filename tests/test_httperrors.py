import json
from http import HTTPStatus

import pytest

from awkit.errors import EmptyQuery
from awkit.httperrors import (
    HttpError,
    export_content_disposition,
    parse_setting_key,
    strip_setting_prefix,
)


def test_already_exists_body():
    err = HttpError(HTTPStatus.NOT_MODIFIED, "Bucket 'id' already exists")
    assert err.status == HTTPStatus.NOT_MODIFIED
    assert err.to_json() == '{"message":"Bucket \'id\' already exists"}'


def test_import_failure_body_escapes_quotes():
    err = HttpError(500, 'Failed to import bucket: BucketAlreadyExists("id1")')
    assert err.status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert err.to_json() == r'{"message":"Failed to import bucket: BucketAlreadyExists(\"id1\")"}'


def test_empty_query_body():
    err = HttpError(HTTPStatus.INTERNAL_SERVER_ERROR, str(EmptyQuery()))
    assert err.to_json() == '{"message":"EmptyQuery"}'


def test_body_round_trip():
    err = HttpError(HTTPStatus.NOT_FOUND, "päth \n with\ttabs")
    assert json.loads(err.to_json()) == {"message": "päth \n with\ttabs"}


def test_illegally_long_key():
    key = "thisisaverylongk" * 8
    with pytest.raises(HttpError) as info:
        parse_setting_key(key)
    assert info.value.status == HTTPStatus.BAD_REQUEST
    assert info.value.message == "Too long key"


def test_setting_key_round_trip():
    stored = parse_setting_key("test_key")
    assert stored == "settings.test_key"
    assert strip_setting_prefix(stored) == "test_key"
    assert strip_setting_prefix("other") == "other"


def test_just_short_enough_key():
    key = "k" * 127
    assert strip_setting_prefix(parse_setting_key(key)) == key


def test_export_disposition():
    assert export_content_disposition(["id1"]) == "attachment; filename=aw-bucket-export_id1.json"
    assert export_content_disposition([]) == "attachment; filename=aw-buckets-export.json"
    assert (
        export_content_disposition(["a", "b"]) == "attachment; filename=aw-buckets-export.json"
    )