"""Thread-safe registry of user_id -> in-progress OnboardingWizard, expiring after inactivity."""
import threading
import time
import logging
from typing import Optional

from artune.config import settings
from artune.modules.onboarding.wizard import OnboardingWizard

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_registry: dict[str, tuple[OnboardingWizard, float]] = {}


def _expired(last_seen: float, now: float) -> bool:
    return now - last_seen > settings.onboarding_ttl_seconds


def get(user_id: str) -> Optional[OnboardingWizard]:
    """Live wizard for user_id, or None when there is none or it expired."""
    now = time.monotonic()
    with _lock:
        entry = _registry.get(user_id)
        if entry is None:
            return None
        wizard, last_seen = entry
        if _expired(last_seen, now):
            del _registry[user_id]
            logger.debug(f"Onboarding wizard for {user_id} expired")
            return None
        _registry[user_id] = (wizard, now)
        return wizard


def save(wizard: OnboardingWizard) -> None:
    with _lock:
        _registry[wizard.user_id] = (wizard, time.monotonic())


def discard(user_id: str) -> None:
    with _lock:
        _registry.pop(user_id, None)
        logger.debug(f"Discarded onboarding wizard for {user_id}")


def prune() -> int:
    """Drop expired wizards. Returns how many were removed."""
    now = time.monotonic()
    with _lock:
        stale = [uid for uid, (_, seen) in _registry.items() if _expired(seen, now)]
        for uid in stale:
            del _registry[uid]
    if stale:
        logger.info(f"Pruned {len(stale)} expired onboarding wizard(s)")
    return len(stale)


def clear() -> None:
    with _lock:
        _registry.clear()
