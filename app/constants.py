import os

SERVICE_NAME = "Kryos Webhook Proxy"
SERVICE_VERSION = "2.1.0"

# Configurações globais de ambiente
SECRET_KEY = os.getenv("SECRET_KEY")
APP_PORT = int(os.getenv("PORT", os.getenv("APP_PORT", "3000")))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Estratégia de autenticação: 'signature' (HMAC do body) ou 'token' (SHA-256 do segredo)
AUTH_MODE = os.getenv("AUTH_MODE", "signature").strip().lower()
# Vazio = usa o padrão da estratégia (30s signature / 60s token)
_replay_window_env = os.getenv("REPLAY_WINDOW_MS", "").strip()
REPLAY_WINDOW_MS = int(_replay_window_env) if _replay_window_env else None
_reject_unexpected_env = os.getenv("REJECT_UNEXPECTED_FIELDS", "").strip().lower()
REJECT_UNEXPECTED_FIELDS = (_reject_unexpected_env == "true") if _reject_unexpected_env else None

# Webhooks do Discord
WEBHOOK_LOGS = os.getenv("WEBHOOK_LOGS")
WEBHOOK_SECURITY = os.getenv("WEBHOOK_SECURITY")
GENERATION_WEBHOOKS = {
    "250k": os.getenv("WEBHOOK_250K"),
    "1m": os.getenv("WEBHOOK_1M"),
    "5m": os.getenv("WEBHOOK_5M"),
    "10m": os.getenv("WEBHOOK_10M"),
    "50m": os.getenv("WEBHOOK_50M"),
}
DISPATCH_TIMEOUT_SECONDS = float(os.getenv("DISPATCH_TIMEOUT_SECONDS", "5"))

# Bloqueio por tentativas de autenticação falhas (0 desativa)
MAX_FAILED_ATTEMPTS = int(os.getenv("MAX_FAILED_ATTEMPTS", "10"))
FAILED_ATTEMPT_WINDOW_SECONDS = int(os.getenv("FAILED_ATTEMPT_WINDOW_SECONDS", "600"))
BLOCK_DURATION_SECONDS = int(os.getenv("BLOCK_DURATION_SECONDS", "600"))
ATTEMPT_CLEANUP_INTERVAL_SECONDS = int(os.getenv("ATTEMPT_CLEANUP_INTERVAL_SECONDS", "600"))  # 10 minutos
ATTEMPT_JANITOR_ENABLED = os.getenv("ATTEMPT_JANITOR_ENABLED", "true").lower() == "true"
ATTEMPT_CACHE_MAX = int(os.getenv("ATTEMPT_CACHE_MAX", "5000"))
# Número de proxies reversos confiáveis na frente do app (Render/Railway = 1).
# 0 ignora X-Forwarded-For: o IP vem da conexão
PROXY_FIX_X_FOR = int(os.getenv("PROXY_FIX_X_FOR", "0"))

JOINER_BASE_URL = os.getenv("JOINER_BASE_URL", "https://chillihub1.github.io/chillihub-joiner/")

# Abaixo disso a notificação é recusada
MIN_GENERATION = 250000

# Tiers de geração, do maior para o menor; vale o primeiro cujo threshold é ultrapassado
GENERATION_TIERS = [
    {"name": "50m", "threshold": 50000000, "label": "50M+", "color": int(os.getenv("TIER_50M_COLOR", str(0xFF0000)))},
    {"name": "10m", "threshold": 10000000, "label": "10M+", "color": int(os.getenv("TIER_10M_COLOR", str(0xFF6600)))},
    {"name": "5m", "threshold": 5000000, "label": "5M+", "color": int(os.getenv("TIER_5M_COLOR", str(0xFFCC00)))},
    {"name": "1m", "threshold": 1000000, "label": "1M+", "color": int(os.getenv("TIER_1M_COLOR", str(0x00FF00)))},
    {"name": "250k", "threshold": None, "label": "250K+", "color": int(os.getenv("TIER_250K_COLOR", str(0x3498DB)))},
]

LOGS_COLOR = 0x1ABC9C
SECURITY_ALERT_COLOR = 0xE74C3C


def default_settings():
    """Valores de ambiente no formato de app.config (sobrescrevíveis em create_app)."""
    return {
        "RELAY_SECRET_KEY": SECRET_KEY,
        "AUTH_MODE": AUTH_MODE,
        "REPLAY_WINDOW_MS": REPLAY_WINDOW_MS,
        "REJECT_UNEXPECTED_FIELDS": REJECT_UNEXPECTED_FIELDS,
        "WEBHOOK_LOGS": WEBHOOK_LOGS,
        "WEBHOOK_SECURITY": WEBHOOK_SECURITY,
        "GENERATION_WEBHOOKS": dict(GENERATION_WEBHOOKS),
        "DISPATCH_TIMEOUT_SECONDS": DISPATCH_TIMEOUT_SECONDS,
        "MAX_FAILED_ATTEMPTS": MAX_FAILED_ATTEMPTS,
        "FAILED_ATTEMPT_WINDOW_SECONDS": FAILED_ATTEMPT_WINDOW_SECONDS,
        "BLOCK_DURATION_SECONDS": BLOCK_DURATION_SECONDS,
        "ATTEMPT_CLEANUP_INTERVAL_SECONDS": ATTEMPT_CLEANUP_INTERVAL_SECONDS,
        "ATTEMPT_JANITOR_ENABLED": ATTEMPT_JANITOR_ENABLED,
        "ATTEMPT_CACHE_MAX": ATTEMPT_CACHE_MAX,
        "PROXY_FIX_X_FOR": PROXY_FIX_X_FOR,
        "JOINER_BASE_URL": JOINER_BASE_URL,
    }
