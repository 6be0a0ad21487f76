import logging

from flask import Flask, jsonify, request
from werkzeug.middleware.proxy_fix import ProxyFix

from .constants import SERVICE_NAME, SERVICE_VERSION, default_settings
from .detection import check_generation
from .formatters import format_brainrot_embed, format_logs_embed, format_security_alert_embed
from .gatekeeper import Gatekeeper
from .services import BackgroundNotifier, DispatchError, send_discord_payload
from .throttle import FailedAttemptTracker, start_attempt_janitor
from .utils import get_client_ip
from .validation import BRAINROT_SCHEMA, LOGS_SCHEMA

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(default_settings())
    if test_config:
        app.config.update(test_config)

    if app.config["PROXY_FIX_X_FOR"] > 0:
        # Só os N hops mais à direita do X-Forwarded-For são confiáveis
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config["PROXY_FIX_X_FOR"])

    gatekeeper = Gatekeeper.from_config(app.config)
    # Contador de falhas (em memória, por processo)
    attempt_tracker = FailedAttemptTracker(
        max_attempts=app.config["MAX_FAILED_ATTEMPTS"],
        window_seconds=app.config["FAILED_ATTEMPT_WINDOW_SECONDS"],
        block_seconds=app.config["BLOCK_DURATION_SECONDS"],
        max_size=app.config["ATTEMPT_CACHE_MAX"],
    )
    app.extensions["gatekeeper"] = gatekeeper
    app.extensions["attempt_tracker"] = attempt_tracker
    security_notifier = BackgroundNotifier(timeout=app.config["DISPATCH_TIMEOUT_SECONDS"])
    app.extensions["security_notifier"] = security_notifier

    if app.config["ATTEMPT_JANITOR_ENABLED"]:
        app.extensions["attempt_janitor"] = start_attempt_janitor(
            attempt_tracker, app.config["ATTEMPT_CLEANUP_INTERVAL_SECONDS"]
        )

    def dispatch_timeout():
        return app.config["DISPATCH_TIMEOUT_SECONDS"]

    def send_security_alert(client_ip, attempts):
        url = app.config.get("WEBHOOK_SECURITY")
        if not url:
            return
        embed = format_security_alert_embed(
            client_ip, attempts, attempt_tracker.block_seconds, request.path
        )
        security_notifier.notify(url, [embed])

    def guard_request(schema):
        """
        Enquadramento + autenticação + validação.
        Retorna (payload, None) se liberado, ou (None, resposta de erro).
        """
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            logger.info("Body JSON inválido em %s", request.path)
            return None, (jsonify({"error": "Invalid JSON body"}), 400)

        client_ip = get_client_ip(request)
        if attempt_tracker.is_blocked(client_ip):
            logger.warning("Requisição de IP bloqueado em %s: %s", request.path, client_ip)
            return None, (jsonify({"error": "Too many failed attempts"}), 429)

        if not gatekeeper.authenticate(body, request.headers):
            logger.warning("❌ Autenticação inválida para %s (ip=%s)", schema.name, client_ip)
            blocked, attempts = attempt_tracker.record_failure(client_ip)
            if blocked:
                logger.warning("IP bloqueado após %d falhas: %s", attempts, client_ip)
                send_security_alert(client_ip, attempts)
            return None, (jsonify({"error": gatekeeper.failure_message}), 403)
        attempt_tracker.reset(client_ip)

        validation = gatekeeper.validate(body, schema)
        if not validation.valid:
            logger.info("❌ Payload inválido para %s: %s", schema.name, validation.error)
            return None, (jsonify({"error": validation.error}), 400)

        return body, None

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            'status': 'online',
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
            'auth_mode': gatekeeper.mode,
        }), 200

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok', 'service': SERVICE_NAME}), 200

    @app.route('/api/logs', methods=['POST'])
    def logs():
        payload, error_response = guard_request(LOGS_SCHEMA)
        if error_response:
            return error_response

        embed = format_logs_embed(payload)
        try:
            send_discord_payload(app.config["WEBHOOK_LOGS"], embeds=[embed], timeout=dispatch_timeout())
        except DispatchError as exc:
            logger.error("❌ Erro ao enviar logs: %s", exc)
            return jsonify({"error": "Failed to send logs"}), 500

        logger.info("✅ Logs enviados")
        return jsonify({"success": True}), 200

    @app.route('/api/brainrot', methods=['POST'])
    def brainrot():
        payload, error_response = guard_request(BRAINROT_SCHEMA)
        if error_response:
            return error_response

        generation_check, tier = check_generation(payload["generation"], app.config["GENERATION_WEBHOOKS"])
        if not generation_check.valid:
            logger.info("Geração recusada: %r", payload["generation"])
            return jsonify({"error": generation_check.error}), 400

        embed = format_brainrot_embed(payload, tier, app.config["JOINER_BASE_URL"])
        try:
            send_discord_payload(tier["webhook_url"], embeds=[embed], timeout=dispatch_timeout())
        except DispatchError as exc:
            logger.error("❌ Erro ao enviar brainrot (tier=%s): %s", tier["name"], exc)
            return jsonify({"error": "Failed to send notification"}), 500

        logger.info("✅ Notificação brainrot enviada (tier=%s)", tier["name"])
        return jsonify({"success": True}), 200

    return app
