import logging
import threading

import requests

logger = logging.getLogger(__name__)


class DispatchError(Exception):
    """Falha ao entregar a mensagem ao webhook do Discord."""


def send_discord_payload(webhook_url, content=None, embeds=None, timeout=5.0):
    if not webhook_url:
        raise DispatchError("webhook URL não configurada")

    payload = {}
    if content is not None:
        payload["content"] = content
    if embeds is not None:
        payload["embeds"] = embeds

    try:
        resp = requests.post(webhook_url, json=payload, timeout=timeout)
        resp.raise_for_status()
    except requests.Timeout as exc:
        raise DispatchError(f"timeout após {timeout}s") from exc
    except requests.HTTPError as exc:
        # A URL do webhook carrega o token; não vai para a mensagem
        raise DispatchError(f"Discord respondeu {exc.response.status_code}") from exc
    except requests.RequestException as exc:
        raise DispatchError(exc.__class__.__name__) from exc

    logger.debug("Discord response: %s", resp.status_code)
    return resp


class BackgroundNotifier:
    """Envia mensagens fora do ciclo da requisição (alertas de segurança)."""

    def __init__(self, timeout=5.0):
        self.timeout = timeout
        self._lock = threading.Lock()
        self._pending = []

    def notify(self, webhook_url, embeds):
        thread = threading.Thread(
            target=self._send, args=(webhook_url, embeds), daemon=True, name="discord-notifier"
        )
        with self._lock:
            self._pending = [t for t in self._pending if t.is_alive()]
            self._pending.append(thread)
        thread.start()
        return thread

    def join(self, timeout=None):
        with self._lock:
            pending = list(self._pending)
        for thread in pending:
            thread.join(timeout)

    def _send(self, webhook_url, embeds):
        try:
            send_discord_payload(webhook_url, embeds=embeds, timeout=self.timeout)
        except DispatchError as exc:
            logger.warning("Falha no envio em background: %s", exc)
