"""
Unit tests for the primitive checks and request-record construction.

These are pure functions, so no database or event loop is involved.
"""
import math

import pytest

from blogapi.schemas import CommentCreate, PostCreate
from blogapi.validation import (
    Invalid,
    is_valid_id,
    is_valid_number,
    is_valid_string,
    parse_id,
    validate_body,
)


@pytest.mark.parametrize("value", ["a", "Hello world", " "])
def test_valid_strings(value):
    assert is_valid_string(value) is True


@pytest.mark.parametrize("value", ["", None, 5, ["a"], {"a": 1}])
def test_invalid_strings(value):
    assert is_valid_string(value) is False


@pytest.mark.parametrize("value", [0, -3, 2.5, 10**30])
def test_valid_numbers(value):
    assert is_valid_number(value) is True


@pytest.mark.parametrize("value", [True, False, "5", None, math.nan, math.inf])
def test_invalid_numbers(value):
    assert is_valid_number(value) is False


def test_is_valid_id_requires_integral_value_in_range():
    assert is_valid_id(3) is True
    assert is_valid_id(3.0) is True
    assert is_valid_id(3.5) is False
    assert is_valid_id(2**31) is False
    assert is_valid_id("3") is False


def test_parse_id_accepts_whole_integers():
    assert parse_id("42") == 42
    assert parse_id("-1") == -1


@pytest.mark.parametrize("raw", ["abc", "12abc", "1.5", "", None, "99999999999", "9" * 500])
def test_parse_id_rejects_non_integers_and_overflow(raw):
    assert parse_id(raw) is None


def test_validate_body_missing_body():
    result = validate_body(None, PostCreate, title=is_valid_string, content=is_valid_string)
    assert result == Invalid("A JSON body must be included")


def test_validate_body_reports_first_invalid_field():
    result = validate_body({"content": 5}, PostCreate, title=is_valid_string, content=is_valid_string)
    assert result == Invalid("Title must be included and be a string")

    result = validate_body({"title": "Hi"}, PostCreate, title=is_valid_string, content=is_valid_string)
    assert result == Invalid("Content must be included and be a string")


def test_validate_body_number_message_uses_json_key():
    result = validate_body(
        {"content": "Nice", "postId": "7"},
        CommentCreate,
        content=is_valid_string,
        postId=is_valid_id,
    )
    assert result == Invalid("PostId must be included and be a number")


def test_validate_body_builds_record():
    result = validate_body(
        {"content": "Nice", "postId": 7, "extra": "ignored"},
        CommentCreate,
        content=is_valid_string,
        postId=is_valid_id,
    )
    assert isinstance(result, CommentCreate)
    assert result.content == "Nice"
    assert result.post_id == 7
