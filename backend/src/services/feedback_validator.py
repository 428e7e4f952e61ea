"""Request body parsing and validation for feedback submissions."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from models.feedback import FeedbackSubmission, FeedbackTopic

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
COUNTRY_CODE_PATTERN = re.compile(r"\+?[0-9]+")
DIGITS_PATTERN = re.compile(r"[0-9]+")

FEEDBACK_TOPICS = [topic.value for topic in FeedbackTopic]

NAME_REQUIRED = "Name is required."
EMAIL_REQUIRED = "Valid email is required."
NUMBER_DIGITS_ONLY = "WhatsApp number must contain digits only."
COUNTRY_CODE_INVALID = "WhatsApp country code must be digits (optional leading +)."
TOPIC_INVALID = f"Feedback topic must be one of: {', '.join(FEEDBACK_TOPICS)}"
MESSAGE_REQUIRED = "Feedback message is required."
INVALID_JSON = "Invalid JSON"


@dataclass(frozen=True)
class RawText:
    """Request body that still has to be decoded."""

    text: str


@dataclass(frozen=True)
class StructuredRecord:
    """Request body that is already a mapping of fields."""

    fields: dict[str, Any]


@dataclass(frozen=True)
class ValidationFailure:
    """Terminal outcome for a rejected request body."""

    message: str

    def to_response(self) -> dict[str, str]:
        return {"error": self.message}


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


# Checked in order; the first failing rule is the one reported.
RULES = [
    ("name", _is_text, NAME_REQUIRED),
    ("email", lambda v: _matches(EMAIL_PATTERN, v), EMAIL_REQUIRED),
    ("whatsapp_number", lambda v: _matches(DIGITS_PATTERN, v), NUMBER_DIGITS_ONLY),
    (
        "whatsapp_country_code",
        lambda v: _matches(COUNTRY_CODE_PATTERN, v),
        COUNTRY_CODE_INVALID,
    ),
    ("feedback_topic", lambda v: v in FEEDBACK_TOPICS, TOPIC_INVALID),
    ("feedback_message", _is_text, MESSAGE_REQUIRED),
]


def read_body(
    raw: str | bytes | dict[str, Any],
) -> RawText | StructuredRecord | ValidationFailure:
    """Classify an inbound body as text to decode or an already decoded record.

    Bytes that are not valid UTF-8 are rejected as invalid JSON.
    """
    if isinstance(raw, dict):
        return StructuredRecord(raw)
    if isinstance(raw, bytes):
        try:
            return RawText(raw.decode("utf-8"))
        except UnicodeDecodeError:
            return ValidationFailure(INVALID_JSON)
    return RawText(raw)


def resolve_body(
    body: RawText | StructuredRecord,
) -> StructuredRecord | ValidationFailure:
    """Decode a text body into a record.

    A JSON string that itself holds JSON (a double-encoded form post) is
    decoded once more. Anything that decodes to a non-object becomes an
    empty record, which then fails validation on its first field.
    """
    if isinstance(body, StructuredRecord):
        return body

    try:
        decoded = json.loads(body.text)
        if isinstance(decoded, str):
            decoded = json.loads(decoded)
    except ValueError:
        return ValidationFailure(INVALID_JSON)

    if not isinstance(decoded, dict):
        return StructuredRecord({})
    return StructuredRecord(decoded)


def validate_submission(
    fields: dict[str, Any],
) -> FeedbackSubmission | ValidationFailure:
    """Validate a decoded body, reporting only the first failing field."""
    for field_name, check, message in RULES:
        if not check(fields.get(field_name)):
            return ValidationFailure(message)

    return FeedbackSubmission(
        **{field_name: fields[field_name] for field_name, _, _ in RULES}
    )


def parse_submission(
    raw: str | bytes | dict[str, Any],
) -> FeedbackSubmission | ValidationFailure:
    """Turn a raw request body into a submission or a single error message."""
    body = read_body(raw)
    resolved = body if isinstance(body, ValidationFailure) else resolve_body(body)
    if isinstance(resolved, ValidationFailure):
        logger.info("Rejected feedback body: %s", resolved.message)
        return resolved

    outcome = validate_submission(resolved.fields)
    if isinstance(outcome, ValidationFailure):
        logger.info("Rejected feedback submission: %s", outcome.message)
    return outcome
