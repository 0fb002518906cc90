"""
Validation rules for bookmark create/update payloads.

Payloads arrive untyped (whatever JSON the client sent). Rules are kept in a
single ordered list and evaluated short-circuit, so a payload with several
problems is reported by its first violation only.
"""
import math
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkValidationError

BOOKMARK_FIELDS = ("title", "url", "description", "rating")

MIN_RATING = 0
MAX_RATING = 5

RATING_ERROR = f"rating must be a number between {MIN_RATING} and {MAX_RATING}"
URL_ERROR = "url must be a valid URL"
EMPTY_UPDATE_ERROR = (
    "Request body must contain either 'title', 'url', 'description', or 'rating'"
)

# HttpUrl also accepts "http:example.com" and "http:/example.com" by normalizing them
WEB_URL_PREFIXES = ("http://", "https://")

_http_url_adapter = TypeAdapter(HttpUrl)


class Rule(NamedTuple):
    """A single check on one payload field; check returns an error message or None."""

    field: str
    check: Callable[[Mapping[str, Any]], str | None]


def missing_message(field: str) -> str:
    """Error message for a required field that is absent or blank."""
    return f"Missing '{field}' in request body"


def parse_rating(value: Any) -> float | None:
    """
    Parse a rating into a float within [MIN_RATING, MAX_RATING].

    Accepts ints, floats and numeric strings. Returns None for anything else,
    including booleans, NaN, infinities and out-of-range numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number) or not MIN_RATING <= number <= MAX_RATING:
        return None
    return number


def is_web_url(value: str) -> bool:
    """True for a well-formed http/https URL with a host."""
    candidate = value.strip()
    if not candidate.lower().startswith(WEB_URL_PREFIXES):
        return False
    try:
        _http_url_adapter.validate_python(candidate)
    except PydanticValidationError:
        return False
    return True


def _require_text(field: str) -> Rule:
    def check(payload: Mapping[str, Any]) -> str | None:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            return missing_message(field)
        return None

    return Rule(field, check)


def _require_rating(payload: Mapping[str, Any]) -> str | None:
    value = payload.get("rating")
    if value is None or (isinstance(value, str) and not value.strip()):
        return missing_message("rating")
    return None


def _rating_in_range(payload: Mapping[str, Any]) -> str | None:
    if parse_rating(payload["rating"]) is None:
        return RATING_ERROR
    return None


def _url_well_formed(payload: Mapping[str, Any]) -> str | None:
    if not is_web_url(payload["url"]):
        return URL_ERROR
    return None


# Evaluation order matters: the first failing rule is the one reported.
BOOKMARK_RULES: tuple[Rule, ...] = (
    _require_text("title"),
    _require_text("url"),
    _require_text("description"),
    Rule("rating", _require_rating),
    Rule("rating", _rating_in_range),
    Rule("url", _url_well_formed),
)


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    return payload if isinstance(payload, Mapping) else {}


def _first_violation(payload: Mapping[str, Any], fields: set[str]) -> str | None:
    for rule in BOOKMARK_RULES:
        if rule.field not in fields:
            continue
        message = rule.check(payload)
        if message is not None:
            return message
    return None


def _normalize(payload: Mapping[str, Any], fields: set[str]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for field in BOOKMARK_FIELDS:
        if field not in fields:
            continue
        value = payload[field]
        if field == "url":
            value = value.strip()
        elif field == "rating":
            value = parse_rating(value)
        normalized[field] = value
    return normalized


def validate_create(payload: Any) -> BookmarkCreate:
    """
    Validate a create payload.

    All four fields are required. Unrecognized keys are dropped.

    Raises:
        BookmarkValidationError: With the message of the first violated rule.
    """
    data = _as_mapping(payload)
    fields = set(BOOKMARK_FIELDS)
    message = _first_violation(data, fields)
    if message is not None:
        raise BookmarkValidationError(message)
    return BookmarkCreate(**_normalize(data, fields))


def validate_update(payload: Any) -> BookmarkUpdate:
    """
    Validate a partial update payload.

    At least one recognized field must be present. Each supplied field is
    checked with the same rule as on create; absent fields are not checked
    and unrecognized keys are dropped.

    Raises:
        BookmarkValidationError: If no recognized field is present, or with the
            message of the first violated rule.
    """
    data = _as_mapping(payload)
    fields = {field for field in BOOKMARK_FIELDS if field in data}
    if not fields:
        raise BookmarkValidationError(EMPTY_UPDATE_ERROR)
    message = _first_violation(data, fields)
    if message is not None:
        raise BookmarkValidationError(message)
    return BookmarkUpdate(**_normalize(data, fields))
