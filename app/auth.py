"""Estratégias de autenticação das requisições vindas do cliente do jogo.

Duas variantes, escolhidas por deploy via AUTH_MODE (nunca as duas na mesma rota):

- signature: header X-Signature = HMAC-SHA256 (hex) do body com as chaves
  de primeiro nível ordenadas, usando o segredo compartilhado como chave.
- token: header X-Auth-Token = SHA-256 (hex) do próprio segredo.

As provas nunca são logadas.
"""
import hashlib
import hmac
import json
import re
from typing import Any, Dict, Mapping, Optional

# Pares válidos já chegam combinados do json.loads; o que sobra é surrogate solto
_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def canonicalize_body(body: Mapping[str, Any]) -> str:
    """
    Serializa o body com as chaves de primeiro nível em ordem crescente.
    Valores aninhados ficam como vieram. Mesmo formato do JSON.stringify
    (sem espaços, sem escapar não-ASCII, surrogates soltos como \\uXXXX).
    """
    sorted_body = {key: body[key] for key in sorted(body)}
    serialized = json.dumps(sorted_body, separators=(",", ":"), ensure_ascii=False)
    return _LONE_SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group(0)):04x}", serialized)


def _constant_time_equals(expected: str, received: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))


class SignatureAuthenticator:
    mode = "signature"
    header_name = "X-Signature"
    failure_message = "Invalid signature"
    default_replay_window_ms = 30000
    default_reject_unexpected_fields = True

    def __init__(self, secret: str):
        self._key = secret.encode("utf-8")

    def compute_proof(self, body: Mapping[str, Any]) -> str:
        message = canonicalize_body(body).encode("utf-8")
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def authenticate(self, body: Mapping[str, Any], proof: Optional[str]) -> bool:
        if not proof:
            return False
        return _constant_time_equals(self.compute_proof(body), proof)


class TokenAuthenticator:
    mode = "token"
    header_name = "X-Auth-Token"
    failure_message = "Invalid authentication token"
    default_replay_window_ms = 60000
    # Variante token nunca recusou campos extras
    default_reject_unexpected_fields = False

    def __init__(self, secret: str):
        self._expected = hashlib.sha256(secret.encode("utf-8")).hexdigest()

    def compute_proof(self, body: Optional[Mapping[str, Any]] = None) -> str:
        return self._expected

    def authenticate(self, body: Mapping[str, Any], proof: Optional[str]) -> bool:
        if not proof:
            return False
        return _constant_time_equals(self._expected, proof)


AUTHENTICATORS: Dict[str, type] = {
    SignatureAuthenticator.mode: SignatureAuthenticator,
    TokenAuthenticator.mode: TokenAuthenticator,
}


def build_authenticator(mode: str, secret: Optional[str]):
    if not secret:
        raise RuntimeError("SECRET_KEY não configurada")
    try:
        cls = AUTHENTICATORS[(mode or "").strip().lower()]
    except KeyError:
        raise ValueError(f"AUTH_MODE inválido: {mode!r} (use 'signature' ou 'token')") from None
    return cls(secret)
