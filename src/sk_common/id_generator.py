"""Client-side idempotency keys for wallet top-ups.

Key layout: `TXN_<millis>-<device>-<seq>`
  - millis: submission time in epoch milliseconds, never moving backwards
  - device: random hex tag drawn once per factory, so two installs
    submitting in the same millisecond do not collide
  - seq:    counter within one millisecond

The backend uses the key to deduplicate a retried top-up.
"""

import re
import secrets
import time
from collections.abc import Callable

IDEMPOTENCY_PREFIX = "TXN_"

_DEVICE_TAG = re.compile(r"^[0-9a-f]{6}$")


def _now_ms() -> int:
    return int(time.time() * 1000)


class IdempotencyKeyFactory:
    def __init__(
        self,
        device_tag: str | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        tag = device_tag if device_tag is not None else secrets.token_hex(3)
        if not _DEVICE_TAG.match(tag):
            raise ValueError("device_tag must be 6 lowercase hex characters")
        self._device_tag = tag
        self._clock = clock
        self._last_ms = -1
        self._seq = 0

    def __call__(self) -> str:
        now = self._clock()
        if now > self._last_ms:
            self._last_ms = now
            self._seq = 0
        else:
            # Same millisecond, or the wall clock stepped back
            self._seq += 1
        return f"{IDEMPOTENCY_PREFIX}{self._last_ms}-{self._device_tag}-{self._seq}"


generate_idempotency_key = IdempotencyKeyFactory()
