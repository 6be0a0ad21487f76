from .constants import LOGS_COLOR, SECURITY_ALERT_COLOR, SERVICE_NAME
from .enrichment import build_headshot_url, build_join_link, build_join_script, build_profile_url
from .utils import iso_timestamp


def _text(value):
    return value if isinstance(value, str) else str(value)


def format_logs_embed(payload, timestamp=None):
    user_id = payload["userId"]
    player_name = _text(payload["playerName"])
    display_name = _text(payload["displayName"])
    headshot_url = build_headshot_url(user_id)

    return {
        "title": "🚀 • Script exécuté",
        "description": f"**{player_name}** a exécuté le script.\n\n> _Merci d'utiliser Kryos Hub_",
        "color": LOGS_COLOR,
        "timestamp": timestamp or iso_timestamp(),
        "author": {
            "name": f"{player_name} • {display_name}",
            "url": build_profile_url(user_id),
            "icon_url": headshot_url,
        },
        "thumbnail": {"url": headshot_url},
        "fields": [
            {"name": "🆔 • User", "value": f"```Name: {player_name} | ID: {user_id}```", "inline": False},
            {"name": "🏷️ • DisplayName", "value": display_name, "inline": True},
            {"name": "📅 • Âge du compte", "value": f"{_text(payload['accountAge'])} jours", "inline": True},
            {
                "name": "🌐 • Place / Serveur",
                "value": f"PlaceId: `{payload['placeId']}`\nJobId: `{payload['jobId']}`",
                "inline": False,
            },
            {"name": "👥 • Joueurs", "value": _text(payload["playersCount"]), "inline": True},
            {"name": "📍 • Position", "value": _text(payload["position"]), "inline": True},
            {"name": "⚙️ • Executor", "value": _text(payload["executor"]), "inline": True},
        ],
        "footer": {"text": "Kryos Hub • Logs", "icon_url": headshot_url},
    }


def format_brainrot_embed(payload, tier, joiner_base_url, timestamp=None):
    place_id = payload["placeId"]
    job_id = payload["jobId"]
    join_link = build_join_link(place_id, job_id, joiner_base_url)
    join_script = build_join_script(place_id, job_id)

    return {
        "title": "💎 | KRYOS NOTIFIER",
        "color": tier["color"],
        "timestamp": timestamp or iso_timestamp(),
        "fields": [
            {"name": "🧠 • Brainrot Name", "value": f"```{payload['brainrotName']}```", "inline": True},
            {"name": "⚡ • Generation", "value": f"```{payload['generation']}```", "inline": True},
            {"name": "🌐 • Place ID", "value": f"`{place_id}`", "inline": False},
            {"name": "🔑 • Job ID", "value": f"`{job_id}`", "inline": False},
            {"name": "➕ • Quick Join", "value": f"[▶️ Click to join the game]({join_link})", "inline": False},
            {"name": "📋 • Join Script (LUA)", "value": f"```lua\n{join_script}\n```", "inline": False},
        ],
        "footer": {"text": f"Kryos Notifier on TOP • Tier {tier['label']}"},
    }


def format_security_alert_embed(client_ip, attempts, block_seconds, route, timestamp=None):
    return {
        "title": "🛡️ • Tentatives d'authentification bloquées",
        "color": SECURITY_ALERT_COLOR,
        "timestamp": timestamp or iso_timestamp(),
        "fields": [
            {"name": "🌐 • IP", "value": f"`{client_ip}`", "inline": True},
            {"name": "🔁 • Tentatives", "value": str(attempts), "inline": True},
            {"name": "⏳ • Blocage", "value": f"{block_seconds}s", "inline": True},
            {"name": "📨 • Route", "value": f"`{route}`", "inline": False},
        ],
        "footer": {"text": f"{SERVICE_NAME} • Sécurité"},
    }
