import json
import re
import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .utils import is_present, parse_int_prefix

# Motivos de recusa (expostos ao chamador via mensagem de erro)
MISSING_FIELD = "missing_field"
EXPIRED_TIMESTAMP = "expired_timestamp"
BAD_FORMAT = "bad_format"
PING_DETECTED = "ping_detected"
UNEXPECTED_FIELD = "unexpected_field"
GENERATION_TOO_LOW = "generation_too_low"

# Tipos de checagem por campo
DIGITS = "digits"
TEXT = "text"
STRING = "string"

_DIGITS_RE = re.compile(r"[0-9]+")
# @everyone, @here, <@id> e <@&role_id>
PING_RE = re.compile(r"@everyone|@here|<@\d+>|<@&\d+>")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls):
        return cls(True)

    @classmethod
    def fail(cls, reason, error):
        return cls(False, reason, error)


@dataclass(frozen=True)
class PayloadSchema:
    name: str
    required: Tuple[str, ...]
    # (campo, tipo, mensagem de erro), na ordem em que são checados
    checks: Tuple[Tuple[str, str, str], ...]

    @property
    def allowed_fields(self):
        return frozenset(self.required) | {"timestamp"}


LOGS_SCHEMA = PayloadSchema(
    name="logs",
    required=(
        "userId", "playerName", "displayName", "accountAge", "jobId",
        "placeId", "playersCount", "executor", "position", "timestamp",
    ),
    checks=(
        ("userId", DIGITS, "Invalid userId format"),
        ("playerName", TEXT, "Invalid playerName"),
        ("accountAge", DIGITS, "Invalid accountAge"),
        ("placeId", DIGITS, "Invalid placeId"),
        ("playersCount", DIGITS, "Invalid playersCount"),
        ("jobId", TEXT, "Invalid jobId"),
    ),
)

BRAINROT_SCHEMA = PayloadSchema(
    name="brainrot",
    required=("brainrotName", "generation", "placeId", "jobId", "timestamp"),
    checks=(
        ("brainrotName", TEXT, "Invalid brainrotName"),
        ("generation", STRING, "Invalid generation format"),
        ("placeId", DIGITS, "Invalid placeId"),
        ("jobId", TEXT, "Invalid jobId"),
    ),
)


def current_time_ms():
    return int(time.time() * 1000)


def is_timestamp_valid(timestamp, window_ms, now_ms=None):
    """Timestamp (ms desde epoch) dentro da janela anti-replay? Falha fechado."""
    if not is_present(timestamp):
        return False
    request_time = parse_int_prefix(timestamp)
    if request_time is None:
        return False
    current = current_time_ms() if now_ms is None else now_ms
    return abs(current - request_time) < window_ms


def _check_field(value, kind):
    if not isinstance(value, str):
        return False
    if kind == DIGITS:
        return _DIGITS_RE.fullmatch(value) is not None
    if kind == TEXT:
        return len(value) > 0
    return True


def contains_ping(payload: Mapping[str, Any]) -> bool:
    content = json.dumps(payload, ensure_ascii=False)
    return PING_RE.search(content) is not None


def validate_payload(payload, schema, window_ms, reject_unexpected_fields=True, now_ms=None):
    for field in schema.required:
        if not is_present(payload.get(field)):
            return ValidationResult.fail(MISSING_FIELD, f"Missing field: {field}")

    if not is_timestamp_valid(payload.get("timestamp"), window_ms, now_ms=now_ms):
        return ValidationResult.fail(EXPIRED_TIMESTAMP, "Invalid or expired timestamp")

    for field, kind, message in schema.checks:
        if not _check_field(payload.get(field), kind):
            return ValidationResult.fail(BAD_FORMAT, message)

    if contains_ping(payload):
        return ValidationResult.fail(PING_DETECTED, "Ping detected in payload")

    if reject_unexpected_fields:
        allowed = schema.allowed_fields
        for key in payload:
            if key not in allowed:
                return ValidationResult.fail(UNEXPECTED_FIELD, f"Unexpected field: {key}")

    return ValidationResult.ok()
