# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Authentication service — mock teacher sign-in backed by a configured account table."""
from typing import Dict, Optional

from pydantic import ValidationError

from studypilot.core.config import settings
from studypilot.core.errors import AuthenticationError, StorageWriteFailure
from studypilot.core.logging import get_logger
from studypilot.metrics.prometheus import LOGIN_ATTEMPTS, STORAGE_WRITE_FAILURES
from studypilot.models.domain import TeacherProfile
from studypilot.repositories.storage import KeyValueStorage

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        storage: KeyValueStorage,
        accounts: Optional[Dict[str, Dict[str, str]]] = None,
        session_key: str = settings.SESSION_KEY,
    ) -> None:
        self._storage = storage
        self._accounts = settings.TEACHER_ACCOUNTS if accounts is None else accounts
        self._session_key = session_key

    def login(self, email: str, password: str) -> TeacherProfile:
        account = self._accounts.get(email.strip().lower())
        if account is None:
            LOGIN_ATTEMPTS.labels(outcome="unknown_account").inc()
            raise AuthenticationError("No account found with this email")
        if account["password"] != password:
            LOGIN_ATTEMPTS.labels(outcome="bad_password").inc()
            raise AuthenticationError("Incorrect password")

        profile = TeacherProfile(id=account["id"], name=account["name"], email=account["email"])
        try:
            self._storage.set(self._session_key, profile.model_dump_json(by_alias=True))
        except StorageWriteFailure:
            STORAGE_WRITE_FAILURES.labels(key=self._session_key).inc()
        LOGIN_ATTEMPTS.labels(outcome="success").inc()
        logger.info("Teacher signed in", extra={"user_id": profile.id})
        return profile

    def logout(self) -> None:
        try:
            self._storage.delete(self._session_key)
        except StorageWriteFailure:
            STORAGE_WRITE_FAILURES.labels(key=self._session_key).inc()
        logger.info("Teacher signed out")

    def current_user(self) -> Optional[TeacherProfile]:
        raw = self._storage.get(self._session_key)
        if raw is None:
            return None
        try:
            return TeacherProfile.model_validate_json(raw)
        except ValidationError:
            return None

    def is_owner_present(self) -> bool:
        return self.current_user() is not None
