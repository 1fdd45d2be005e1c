"""Field rules for user payloads.

Every rule is a sequence of typed predicate checks. All fields are checked
before anything is written, and every failing field is reported, not just
the first one. Messages follow Laravel's default wording so existing clients
can keep matching on them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email

from src.user_api.core.security import BCRYPT_MAX_PASSWORD_BYTES
from src.user_api.entities.core._base import SQL_INTEGER_MAX
from src.user_api.entities.core.user import MEMBERSHIP_STATUSES

# A check returns None on success or a message template with an {attribute} slot
Check = Callable[[Any], str | None]

REQUIRED_MESSAGE = "The {attribute} field is required."
UNIQUE_MESSAGE = "The {attribute} has already been taken."

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def humanize(field_name: str) -> str:
    return field_name.replace("_", " ")


def format_message(template: str, field_name: str) -> str:
    return template.format(attribute=humanize(field_name))


def is_blank(value: Any, strip: bool = True) -> bool:
    if not isinstance(value, str):
        return value is None
    return (value.strip() if strip else value) == ""


def is_string(value: Any) -> str | None:
    return None if isinstance(value, str) else "The {attribute} must be a string."


def max_chars(limit: int) -> Check:
    def check(value: str) -> str | None:
        if len(value) <= limit:
            return None
        return f"The {{attribute}} must not be greater than {limit} characters."

    return check


def min_chars(limit: int) -> Check:
    def check(value: str) -> str | None:
        if len(value) >= limit:
            return None
        return f"The {{attribute}} must be at least {limit} characters."

    return check


def max_bytes(limit: int) -> Check:
    def check(value: str) -> str | None:
        if len(value.encode("utf-8")) <= limit:
            return None
        return f"The {{attribute}} must not be greater than {limit} bytes."

    return check


def is_email(value: str) -> str | None:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return "The {attribute} must be a valid email address."
    return None


def resolve_integer(value: Any) -> int:
    """Accept ints, integral floats and integer strings; booleans are rejected.

    Raises:
        ValueError: If ``value`` does not represent an integer
    """
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    raise ValueError(f"not an integer: {value!r}")


def min_value(limit: int) -> Check:
    def check(value: int) -> str | None:
        if value >= limit:
            return None
        return f"The {{attribute}} must be at least {limit}."

    return check


def max_value(limit: int) -> Check:
    def check(value: int) -> str | None:
        if value <= limit:
            return None
        return f"The {{attribute}} must not be greater than {limit}."

    return check


def one_of(choices: tuple[str, ...]) -> Check:
    def check(value: Any) -> str | None:
        if isinstance(value, str) and value in choices:
            return None
        return "The selected {attribute} is invalid."

    return check


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one field.

    ``required`` applies to full payloads; in partial payloads any field that
    is sent is required to carry a value. ``gate`` is a type check: when it
    fails, the remaining checks are skipped. With ``keep_whitespace`` only an
    empty string counts as missing, so a password of spaces is a password.
    """

    name: str
    required: bool
    gate: Check | None = None
    checks: tuple[Check, ...] = ()
    trim: bool = False
    integer: bool = False
    normalize: Callable[[Any], Any] | None = None
    keep_whitespace: bool = False

    def apply(self, value: Any) -> tuple[Any, list[str]]:
        if self.trim and isinstance(value, str):
            value = value.strip()

        if self.integer:
            try:
                value = resolve_integer(value)
            except ValueError:
                return value, [format_message("The {attribute} must be an integer.", self.name)]

        if self.gate is not None:
            message = self.gate(value)
            if message is not None:
                return value, [format_message(message, self.name)]

        errors = [
            format_message(message, self.name)
            for message in (check(value) for check in self.checks)
            if message is not None
        ]
        if not errors and self.normalize is not None:
            value = self.normalize(value)
        return value, errors


USER_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        name="name",
        required=True,
        gate=is_string,
        checks=(max_chars(255),),
        trim=True,
    ),
    FieldRule(
        name="email",
        required=True,
        gate=is_string,
        checks=(max_chars(255), is_email),
        trim=True,
        normalize=str.lower,
    ),
    FieldRule(
        name="password",
        required=True,
        gate=is_string,
        checks=(min_chars(8), max_bytes(BCRYPT_MAX_PASSWORD_BYTES)),
        keep_whitespace=True,
    ),
    FieldRule(
        name="age",
        required=False,
        checks=(min_value(0), max_value(SQL_INTEGER_MAX)),
        integer=True,
    ),
    FieldRule(
        name="membership_status",
        required=False,
        checks=(one_of(MEMBERSHIP_STATUSES),),
    ),
)


@dataclass
class ValidationResult:
    """Cleaned values of the fields that passed, plus messages per failing field."""

    data: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, template: str) -> None:
        self.data.pop(field_name, None)
        self.errors.setdefault(field_name, []).append(
            format_message(template, field_name)
        )


def validate_user_fields(
    fields: Mapping[str, Any],
    *,
    partial: bool = False,
    rules: tuple[FieldRule, ...] = USER_RULES,
) -> ValidationResult:
    """Run every rule against ``fields``.

    With ``partial=False`` (create) required fields must be present and
    optional ones may be null. With ``partial=True`` (update) absent fields are
    skipped and any field that is present must hold a value. Keys without a
    rule are dropped.
    """
    result = ValidationResult()

    for rule in rules:
        present = rule.name in fields
        value = fields.get(rule.name)

        if not present and (partial or not rule.required):
            continue

        if is_blank(value, strip=not rule.keep_whitespace):
            if partial or rule.required:
                result.add_error(rule.name, REQUIRED_MESSAGE)
            else:
                # Optional fields accept null, and an empty string reads as null
                result.data[rule.name] = None
            continue

        cleaned, errors = rule.apply(value)
        if errors:
            result.errors[rule.name] = errors
        else:
            result.data[rule.name] = cleaned

    return result
