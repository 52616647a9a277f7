# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass

import redis  # type: ignore[import-untyped]

from appupdate.services._shared.ports import CaptchaCache


@dataclass(slots=True)
class RedisCaptchaCache(CaptchaCache):
    """
    Redis-backed captcha cache shared by all workers.

    Expiry is delegated to Redis (``SET ... EX``); ``take`` runs GET and DEL in
    one MULTI/EXEC transaction so an answer is handed out at most once.

    :param r: A Redis client (already connected).
    :param ttl_seconds: Lifetime of each entry.
    """

    r: redis.Redis
    ttl_seconds: int = 600

    @staticmethod
    def _k(captcha_id: str) -> str:
        return f"captcha:{captcha_id}"

    def put(self, captcha_id: str, answer: str) -> None:
        self.r.set(self._k(captcha_id), answer, ex=max(1, int(self.ttl_seconds)))

    def take(self, captcha_id: str) -> str | None:
        pipe = self.r.pipeline(transaction=True)
        pipe.get(self._k(captcha_id))
        pipe.delete(self._k(captcha_id))
        raw, _ = pipe.execute()
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
