import logging
import threading
import time
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class FailedAttemptTracker:
    """
    Conta falhas de autenticação por cliente (IP) numa janela deslizante e
    bloqueia o cliente por block_seconds ao atingir max_attempts.
    max_attempts <= 0 desativa o bloqueio.
    """

    def __init__(self, max_attempts: int, window_seconds: int, block_seconds: int,
                 max_size: int = 5000, clock=time.monotonic):
        self.max_attempts = max_attempts
        self.window = window_seconds
        self.block_seconds = block_seconds
        self.max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (primeira falha da janela, contagem)
        self._attempts: Dict[str, tuple] = {}
        # key -> instante de desbloqueio
        self._blocked: Dict[str, float] = {}

    @property
    def enabled(self) -> bool:
        return self.max_attempts > 0

    def is_blocked(self, key: str) -> bool:
        if not self.enabled:
            return False
        with self._lock:
            until = self._blocked.get(key)
            if until is None:
                return False
            if self._clock() >= until:
                self._blocked.pop(key, None)
                return False
            return True

    def attempts(self, key: str) -> int:
        with self._lock:
            entry = self._attempts.get(key)
            return entry[1] if entry else 0

    def record_failure(self, key: str) -> Tuple[bool, int]:
        """Registra uma falha. Retorna (bloqueou agora?, falhas na janela atual)."""
        if not self.enabled:
            return False, 0
        with self._lock:
            now = self._clock()
            first, count = self._attempts.get(key, (now, 0))
            if (now - first) > self.window:
                first, count = now, 0
            count += 1
            self._attempts[key] = (first, count)
            if count >= self.max_attempts:
                self._blocked[key] = now + self.block_seconds
                self._attempts.pop(key, None)
                self._evict_if_needed(now)
                return True, count
            self._evict_if_needed(now)
            return False, count

    def reset(self, key: str):
        with self._lock:
            self._attempts.pop(key, None)

    def purge_expired(self) -> int:
        with self._lock:
            before = len(self._attempts) + len(self._blocked)
            self._purge(self._clock())
            return before - (len(self._attempts) + len(self._blocked))

    def clear(self):
        with self._lock:
            self._attempts.clear()
            self._blocked.clear()

    def _purge(self, now: float):
        for k in [k for k, (first, _) in self._attempts.items() if (now - first) > self.window]:
            self._attempts.pop(k, None)
        for k in [k for k, until in self._blocked.items() if now >= until]:
            self._blocked.pop(k, None)

    def _evict_if_needed(self, now: float):
        # Chamado com o lock adquirido
        if len(self._attempts) <= self.max_size:
            return
        self._purge(now)
        if len(self._attempts) > self.max_size:
            # Remove as janelas mais antigas primeiro
            oldest = sorted(self._attempts, key=lambda k: self._attempts[k][0])
            for k in oldest[: len(self._attempts) - self.max_size]:
                self._attempts.pop(k, None)


class AttemptJanitor(threading.Thread):
    """Limpa periodicamente as entradas expiradas do tracker."""

    def __init__(self, tracker: FailedAttemptTracker, interval_seconds: int):
        super().__init__(daemon=True, name="attempt-janitor")
        self.tracker = tracker
        self.interval = max(1, interval_seconds)
        self._stop_event = threading.Event()

    def stop(self):
        self._stop_event.set()

    def run(self):
        while not self._stop_event.wait(self.interval):
            removed = self.tracker.purge_expired()
            if removed:
                logger.debug("Attempt janitor: %d entradas expiradas removidas", removed)


def start_attempt_janitor(tracker: FailedAttemptTracker, interval_seconds: int) -> Optional[AttemptJanitor]:
    if not tracker.enabled:
        return None
    janitor = AttemptJanitor(tracker, interval_seconds)
    janitor.start()
    logger.info("Attempt janitor iniciado (intervalo=%ss)", janitor.interval)
    return janitor
