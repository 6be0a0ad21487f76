import logging
from typing import Any, Mapping, Optional

from .auth import build_authenticator
from .validation import ValidationResult, validate_payload

logger = logging.getLogger(__name__)


class Gatekeeper:
    """
    Decide se uma requisição é autêntica e bem formada antes de qualquer envio.
    Uma instância por app, com uma única estratégia de autenticação.
    """

    def __init__(self, authenticator, replay_window_ms: Optional[int] = None,
                 reject_unexpected_fields: Optional[bool] = None):
        self.authenticator = authenticator
        self.replay_window_ms = (
            replay_window_ms if replay_window_ms is not None
            else authenticator.default_replay_window_ms
        )
        self.reject_unexpected_fields = (
            reject_unexpected_fields if reject_unexpected_fields is not None
            else authenticator.default_reject_unexpected_fields
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Gatekeeper":
        authenticator = build_authenticator(config.get("AUTH_MODE"), config.get("RELAY_SECRET_KEY"))
        gatekeeper = cls(
            authenticator,
            replay_window_ms=config.get("REPLAY_WINDOW_MS"),
            reject_unexpected_fields=config.get("REJECT_UNEXPECTED_FIELDS"),
        )
        logger.info(
            "Gatekeeper configurado: mode=%s window_ms=%s reject_unexpected=%s",
            authenticator.mode, gatekeeper.replay_window_ms, gatekeeper.reject_unexpected_fields,
        )
        return gatekeeper

    @property
    def mode(self) -> str:
        return self.authenticator.mode

    @property
    def failure_message(self) -> str:
        return self.authenticator.failure_message

    def authenticate(self, body: Mapping[str, Any], headers: Mapping[str, str]) -> bool:
        return self.authenticator.authenticate(body, headers.get(self.authenticator.header_name))

    def validate(self, payload: Mapping[str, Any], schema, now_ms: Optional[int] = None) -> ValidationResult:
        return validate_payload(
            payload,
            schema,
            self.replay_window_ms,
            reject_unexpected_fields=self.reject_unexpected_fields,
            now_ms=now_ms,
        )
