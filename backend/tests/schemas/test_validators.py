"""Tests for bookmark create/update payload validation."""
from typing import Any

import pytest

from schemas.validators import (
    EMPTY_UPDATE_ERROR,
    RATING_ERROR,
    URL_ERROR,
    is_web_url,
    parse_rating,
    validate_create,
    validate_update,
)
from services.exceptions import BookmarkValidationError


def valid_payload(**overrides: Any) -> dict[str, Any]:
    """A create payload that passes every rule, with optional overrides."""
    payload: dict[str, Any] = {
        "title": "Google",
        "url": "https://www.google.com",
        "description": "Where we find everything else",
        "rating": 4,
    }
    payload.update(overrides)
    return payload


# =============================================================================
# validate_create
# =============================================================================


def test_validate_create_returns_normalized_payload() -> None:
    """Valid payloads come back with only the four fields and a float rating."""
    data = validate_create(valid_payload(extra="ignored", url="  https://example.com/a  "))
    assert data.model_dump() == {
        "title": "Google",
        "url": "https://example.com/a",
        "description": "Where we find everything else",
        "rating": 4.0,
    }


def test_validate_create_keeps_raw_markup() -> None:
    """Markup in free text is not touched at write time."""
    data = validate_create(valid_payload(title="<b>bold</b>"))
    assert data.title == "<b>bold</b>"


@pytest.mark.parametrize("field", ["title", "url", "description", "rating"])
def test_validate_create_missing_field(field: str) -> None:
    """Each required field reports itself when absent."""
    payload = valid_payload()
    del payload[field]
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(payload)
    assert exc_info.value.message == f"Missing '{field}' in request body"


@pytest.mark.parametrize("field", ["title", "url", "description"])
@pytest.mark.parametrize("value", ["", "   ", None, 42])
def test_validate_create_blank_text_field(field: str, value: Any) -> None:
    """Text fields must be non-empty strings after trimming."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(valid_payload(**{field: value}))
    assert exc_info.value.message == f"Missing '{field}' in request body"


@pytest.mark.parametrize("value", [None, "", "  "])
def test_validate_create_blank_rating(value: Any) -> None:
    """A null or blank rating counts as missing."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(valid_payload(rating=value))
    assert exc_info.value.message == "Missing 'rating' in request body"


@pytest.mark.parametrize(
    "rating",
    [-1, 5.5, 6, "invalid", "NaN", "inf", True, [3], {"value": 3}, 10**400],
)
def test_validate_create_rejects_bad_rating(rating: Any) -> None:
    """Non-numeric or out-of-range ratings fail with the rating message."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(valid_payload(rating=rating))
    assert exc_info.value.message == RATING_ERROR
    assert exc_info.value.message == "rating must be a number between 0 and 5"


@pytest.mark.parametrize("rating", [0, 5, 2.5, "3", " 4.5 "])
def test_validate_create_accepts_rating_bounds(rating: Any) -> None:
    """Both bounds are inclusive and numeric strings are parsed."""
    data = validate_create(valid_payload(rating=rating))
    assert data.rating == float(str(rating).strip())


@pytest.mark.parametrize(
    "url",
    [
        "not-a-url",
        "www.google.com",
        "ftp://example.com/file",
        "javascript:alert(1)",
        "http://",
        "http:example.com",
        "http:/example.com",
        "https:\\\\example.com",
    ],
)
def test_validate_create_rejects_bad_url(url: str) -> None:
    """Anything that is not an http/https URL with a host is rejected."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(valid_payload(url=url))
    assert exc_info.value.message == URL_ERROR
    assert exc_info.value.message == "url must be a valid URL"


def test_validate_create_url_failure_example() -> None:
    """The canonical bad-url payload is reported as a url failure."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create({"title": "t", "url": "not-a-url", "description": "d", "rating": 3})
    assert exc_info.value.message == "url must be a valid URL"


def test_validate_create_reports_first_violation_only() -> None:
    """Rules are evaluated in a fixed order and the first failure wins."""
    cases = [
        ({}, "Missing 'title' in request body"),
        ({"title": "t"}, "Missing 'url' in request body"),
        ({"title": "t", "url": "bad"}, "Missing 'description' in request body"),
        ({"title": "t", "url": "bad", "description": "d"}, "Missing 'rating' in request body"),
        # rating range is checked before url format
        ({"title": "t", "url": "bad", "description": "d", "rating": 9}, RATING_ERROR),
        ({"title": "t", "url": "bad", "description": "d", "rating": 3}, URL_ERROR),
    ]
    for payload, expected in cases:
        with pytest.raises(BookmarkValidationError) as exc_info:
            validate_create(payload)
        assert exc_info.value.message == expected


@pytest.mark.parametrize("payload", [None, [], "title", 7])
def test_validate_create_non_object_payload(payload: Any) -> None:
    """A body that is not an object is treated as empty."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_create(payload)
    assert exc_info.value.message == "Missing 'title' in request body"


# =============================================================================
# validate_update
# =============================================================================


@pytest.mark.parametrize("payload", [{}, {"irrelevantField": "foo"}, None, []])
def test_validate_update_requires_recognized_field(payload: Any) -> None:
    """Payloads with none of the four fields are rejected with the fixed message."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_update(payload)
    assert exc_info.value.message == EMPTY_UPDATE_ERROR
    assert exc_info.value.message == (
        "Request body must contain either 'title', 'url', 'description', or 'rating'"
    )


def test_validate_update_only_supplied_fields_are_set() -> None:
    """Unsupplied and unrecognized fields are not part of the merge."""
    data = validate_update({"title": "X", "irrelevantField": "foo"})
    assert data.model_dump(exclude_unset=True) == {"title": "X"}


def test_validate_update_normalizes_supplied_fields() -> None:
    """Supplied url and rating are normalized like on create."""
    data = validate_update({"url": " https://example.org ", "rating": "2"})
    assert data.model_dump(exclude_unset=True) == {
        "url": "https://example.org",
        "rating": 2.0,
    }


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"title": ""}, "Missing 'title' in request body"),
        ({"title": None}, "Missing 'title' in request body"),
        ({"description": "   "}, "Missing 'description' in request body"),
        ({"url": "not-a-url"}, URL_ERROR),
        ({"rating": 7}, RATING_ERROR),
        ({"rating": None}, "Missing 'rating' in request body"),
        ({"url": "not-a-url", "rating": 7}, RATING_ERROR),
    ],
)
def test_validate_update_checks_supplied_fields(payload: dict, expected: str) -> None:
    """Each supplied field gets the create rule; the first failure is reported."""
    with pytest.raises(BookmarkValidationError) as exc_info:
        validate_update(payload)
    assert exc_info.value.message == expected


def test_validate_update_does_not_check_absent_fields() -> None:
    """Only the fields present are validated."""
    data = validate_update({"rating": 0})
    assert data.model_dump(exclude_unset=True) == {"rating": 0.0}


# =============================================================================
# Helpers
# =============================================================================


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3, 3.0), ("1.5", 1.5), (False, None), ("", None), (-0.1, None), (None, None)],
)
def test_parse_rating(value: Any, expected: float | None) -> None:
    """parse_rating returns a float in range or None."""
    assert parse_rating(value) == expected


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.thinkful.com", True),
        ("http://localhost:8000/bookmarks", True),
        ("HTTPS://EXAMPLE.COM/Path?q=1#frag", True),
        ("mailto:someone@example.com", False),
        ("example.com", False),
        ("http:example.com", False),
        ("http:/example.com", False),
        ("  https://example.com  ", True),
    ],
)
def test_is_web_url(url: str, expected: bool) -> None:
    """Only http and https URLs with a host are accepted."""
    assert is_web_url(url) is expected
