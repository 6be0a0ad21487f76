import re
from datetime import datetime, timezone

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")
_LEADING_FLOAT_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


def is_present(value):
    """
    Campo obrigatório presente?
    Ausentes: None, "", False e zero numérico. "0" (string) conta como presente.
    Listas/dicts vazios contam como presentes.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and value == value  # NaN é ausente
    return True


def parse_int_prefix(value):
    """Inteiro no início do valor (semelhante ao parseInt). None se não houver."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_float_prefix(text):
    """Float no início do texto (semelhante ao parseFloat, sem sinal/expoente)."""
    if not text:
        return None
    match = _LEADING_FLOAT_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def iso_timestamp(now=None):
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_client_ip(request):
    # X-Forwarded-For já foi resolvido pelo ProxyFix (só os hops confiáveis)
    return request.remote_addr or "unknown"
