from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_REGISTRATION_CODE_DAYS, REGISTRATION_CODE_BYTES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidOrExpiredCode, ValidationError
from .model import RegistrationCode
from .repository import RegistrationCodeRepository

logger = logging.getLogger(__name__)

_MAX_GENERATE_ATTEMPTS = 20


def random_code() -> str:
    return secrets.token_hex(REGISTRATION_CODE_BYTES).upper()


class RegistrationCodeService:
    """Use case: issue, check and consume registration codes.

    Checking (``is_valid``) never changes a code; callers consume a code with
    an explicit ``consume`` once the registration it gates has succeeded.
    """

    def __init__(
        self,
        codes: RegistrationCodeRepository,
        *,
        code_factory: Optional[Callable[[], str]] = None,
        default_days: int = DEFAULT_REGISTRATION_CODE_DAYS,
    ):
        self._codes = codes
        self._code_factory = code_factory or random_code
        self._default_days = int(default_days)

    def generate(
        self,
        *,
        current_role: Role,
        creator_id: int,
        expiry_days: Optional[int] = None,
        now: datetime | None = None,
    ) -> RegistrationCode:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can generate registration codes")

        days = self._default_days if expiry_days is None else expiry_days
        try:
            days = int(days)
        except (TypeError, ValueError):
            raise ValidationError("Expiry days must be a whole number")
        if days < 1:
            raise ValidationError("Expiry days must be at least 1")

        now = now or now_local()
        for _ in range(_MAX_GENERATE_ATTEMPTS):
            code = self._code_factory().strip().upper()
            if not self._codes.get_by_code(code):
                break
        else:
            raise ValidationError("Could not generate a unique registration code")

        created = self._codes.create(
            code=code,
            expiry_date=now + timedelta(days=days),
            created_by=int(creator_id),
            created_at=now,
        )
        logger.info("Registration code %s generated by %s (valid %d days)", created.code, creator_id, days)
        return created

    def is_valid(self, code: str, *, now: datetime | None = None) -> bool:
        found = self._codes.get_by_code(code)
        return bool(found and found.is_valid_at(now or now_local()))

    def consume(self, code: str) -> RegistrationCode:
        found = self._codes.get_by_code(code)
        if not found:
            raise InvalidOrExpiredCode()
        if found.is_used:
            return found

        used = self._codes.mark_used(code_id=found.code_id)
        if not used:
            raise InvalidOrExpiredCode()
        logger.info("Registration code %s consumed", used.code)
        return used

    def list_codes(self, *, current_role: Role) -> Sequence[RegistrationCode]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can list registration codes")
        return self._codes.list_all()
