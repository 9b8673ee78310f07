from __future__ import annotations

import logging
import math
import re
import threading
import time
import uuid
from typing import Callable, Iterable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import (
    DEFAULT_MIN_PASSWORD_LENGTH,
    DEFAULT_SIGNIN_COOLDOWN_SECONDS,
    DEFAULT_SIGNIN_MAX_ATTEMPTS,
    DEFAULT_SIGNIN_WINDOW_SECONDS,
)
from ..core.exceptions import CredentialError, RateLimitError
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

INVALID_CREDENTIALS = "Invalid login credentials"


class SignInThrottle:
    """Counts failed sign-ins per key inside a sliding window.

    `max_attempts` failures within `window_seconds` lock the key out for
    `cooldown_seconds`. Keys with no recent failure and no lock are dropped.
    """

    def __init__(
        self,
        *,
        max_attempts: int = DEFAULT_SIGNIN_MAX_ATTEMPTS,
        cooldown_seconds: int = DEFAULT_SIGNIN_COOLDOWN_SECONDS,
        window_seconds: int = DEFAULT_SIGNIN_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._max_attempts = int(max_attempts)
        self._cooldown = int(cooldown_seconds)
        self._window = int(window_seconds)
        self._clock = clock
        self._failures: dict[str, list[float]] = {}
        self._locked_until: dict[str, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(set(self._failures) | set(self._locked_until))

    def _sweep(self, now: float) -> None:
        horizon = now - self._window
        for key in list(self._failures):
            recent = [t for t in self._failures[key] if t > horizon]
            if recent:
                self._failures[key] = recent
            else:
                del self._failures[key]
        for key, until in list(self._locked_until.items()):
            if until <= now:
                del self._locked_until[key]

    def check(self, key: str) -> None:
        with self._lock:
            until = self._locked_until.get(key)
            if until is None:
                return
            remaining = until - self._clock()
            if remaining <= 0:
                self._locked_until.pop(key, None)
                self._failures.pop(key, None)
                return
        seconds = max(1, math.ceil(remaining))
        raise RateLimitError(
            f"For security purposes, you can only request this after {seconds} seconds.",
            retry_after=seconds,
        )

    def record_failure(self, key: str) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            failures = self._failures.setdefault(key, [])
            failures.append(now)
            if len(failures) >= self._max_attempts:
                self._locked_until[key] = now + self._cooldown
                del self._failures[key]
                logger.warning("sign-in locked for %s after %d failures", key, len(failures))

    def reset(self, key: str) -> None:
        with self._lock:
            self._failures.pop(key, None)
            self._locked_until.pop(key, None)


class CredentialProvider:
    """Email/password identity provider backed by the auth_accounts table."""

    def __init__(
        self,
        accounts: AccountRepository,
        *,
        throttle: Optional[SignInThrottle] = None,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ):
        self._accounts = accounts
        self._throttle = throttle or SignInThrottle()
        self._min_password_length = int(min_password_length)

    def sign_up(self, email: str, password: str) -> Account:
        email = (email or "").strip().lower()
        if not _EMAIL_RE.match(email):
            raise CredentialError(f"Invalid email: {email}")
        if password is None or len(password) < self._min_password_length:
            raise CredentialError(f"Password should be at least {self._min_password_length} characters")
        if self._accounts.get_by_email(email):
            raise CredentialError("User already registered")

        account = self._accounts.create(
            account_id=str(uuid.uuid4()),
            email=email,
            password_hash=generate_password_hash(password),
        )
        logger.info("account created: %s", account.account_id)
        return account

    def _verify(self, email: str, password: str) -> Optional[Account]:
        account = self._accounts.get_by_email((email or "").strip().lower())
        if not account:
            return None
        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        return account if ok else None

    def sign_in_with_password(self, email: str, password: str) -> Account:
        email = (email or "").strip().lower()
        return self.sign_in_any((email,), password, throttle_key=email)

    def sign_in_any(self, emails: Iterable[str], password: str, *, throttle_key: str) -> Account:
        """Try each email in order under one throttle key.

        A call counts as at most one failure, however many emails it tried.
        `emails` may be lazy; it is consumed only until an email matches.
        """
        key = (throttle_key or "").strip().lower()
        self._throttle.check(key)

        for email in emails:
            account = self._verify(email, password)
            if account:
                self._throttle.reset(key)
                return account

        self._throttle.record_failure(key)
        raise CredentialError(INVALID_CREDENTIALS)

    def get_account(self, account_id: str) -> Optional[Account]:
        if not account_id:
            return None
        return self._accounts.get_by_id(account_id)
