# appupdate/services/captcha/service.py
from __future__ import annotations

import logging
import secrets
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from appupdate.services._shared.errors import CaptchaExpiredOrMissingError, CaptchaMismatchError
from appupdate.services._shared.ports import CaptchaCache

log = logging.getLogger(__name__)

# Visually ambiguous characters (0/O, 1/l/I) are excluded.
CAPTCHA_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"


@dataclass(frozen=True, slots=True)
class IssuedCaptcha:
    """
    A freshly issued captcha.

    :param captcha_id: Opaque identifier the client echoes back.
    :param answer: Expected answer text; never sent to the client.
    :param image_png: Rendered PNG bytes.
    """

    captcha_id: str
    answer: str
    image_png: bytes


class CaptchaService:
    """
    Issue and validate one-time captcha challenges.

    :param cache: Storage with atomic take-once semantics.
    :param render: Callable turning answer text into image bytes.
    :param length: Number of characters per answer.
    """

    def __init__(
        self,
        *,
        cache: CaptchaCache,
        render: Callable[[str], bytes],
        length: int = 4,
    ) -> None:
        if length < 1:
            raise ValueError("captcha length must be >= 1")
        self.cache = cache
        self.render = render
        self.length = length

    def _random_answer(self) -> str:
        return "".join(secrets.choice(CAPTCHA_ALPHABET) for _ in range(self.length))

    def issue(self) -> IssuedCaptcha:
        """Generate, store and render a new challenge."""
        captcha_id = str(uuid.uuid4())
        answer = self._random_answer()
        image = self.render(answer)
        self.cache.put(captcha_id, answer)
        return IssuedCaptcha(captcha_id=captcha_id, answer=answer, image_png=image)

    def validate(self, captcha_id: str, code: str) -> None:
        """
        Consume the challenge and compare the submitted code.

        The entry is removed whether or not the code matches. Comparison
        ignores case and surrounding whitespace.

        :raises CaptchaExpiredOrMissingError: Unknown, consumed or expired id.
        :raises CaptchaMismatchError: Code does not match the answer.
        """
        expected = self.cache.take(captcha_id or "")
        if expected is None:
            raise CaptchaExpiredOrMissingError()
        if expected.strip().lower() != (code or "").strip().lower():
            log.info("captcha mismatch for id %s", captcha_id)
            raise CaptchaMismatchError()
