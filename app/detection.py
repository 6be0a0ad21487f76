import re

from .constants import GENERATION_TIERS, MIN_GENERATION
from .utils import parse_float_prefix
from .validation import GENERATION_TOO_LOW, ValidationResult

_NON_NUMERIC_RE = re.compile(r"[^\d.]")


def parse_generation(generation):
    """'$3,000,000/s' -> 3000000.0. None se não sobrar número."""
    if not isinstance(generation, str):
        return None
    return parse_float_prefix(_NON_NUMERIC_RE.sub("", generation))


def get_generation_tier(value, min_generation=MIN_GENERATION):
    """Nome do tier para o valor de geração, ou None se inválido/abaixo do mínimo."""
    if value is None or value < min_generation:
        return None
    for tier in GENERATION_TIERS:
        threshold = tier["threshold"]
        if threshold is None or value > threshold:
            return tier["name"]
    return None


def get_tier_config(tier_name, webhooks):
    for tier in GENERATION_TIERS:
        if tier["name"] == tier_name:
            return {
                "name": tier["name"],
                "label": tier["label"],
                "color": tier["color"],
                "webhook_url": (webhooks or {}).get(tier["name"]),
            }
    raise KeyError(tier_name)


def resolve_generation(generation, webhooks):
    """Extrai o valor e resolve o tier; None quando a notificação deve ser recusada."""
    value = parse_generation(generation)
    tier_name = get_generation_tier(value)
    if tier_name is None:
        return None
    config = get_tier_config(tier_name, webhooks)
    config["value"] = value
    return config


def check_generation(generation, webhooks):
    """(ValidationResult, tier); tier é None quando a geração é recusada."""
    tier = resolve_generation(generation, webhooks)
    if tier is None:
        return ValidationResult.fail(GENERATION_TOO_LOW, "Generation too low or invalid"), None
    return ValidationResult.ok(), tier
