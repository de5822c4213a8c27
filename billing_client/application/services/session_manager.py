# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Single owner of the signed-in identity and its persisted copy."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from billing_client.application.interfaces import AuthPort
from billing_client.domain.exceptions import InvariantViolation
from billing_client.domain.session import (
    Navigator,
    Session,
    SessionStatus,
    SessionStorage,
    UserProfile,
    ViewGate,
)
from billing_client.interfaces.http.dto.auth import (
    AuthResponseDTO,
    LoginRequestDTO,
    SignupRequestDTO,
)
from billing_client.shared.config import SessionConfig, load_config
from billing_client.shared.errors import (
    AuthenticationFailed,
    MalformedPersistedSession,
    RequestFailed,
    first_error_message,
    format_pydantic_errors,
)
from billing_client.shared.logging import logger

SessionListener = Callable[[Session], None]
DTO = TypeVar("DTO", bound=BaseModel)


class SessionManager:
    def __init__(
        self,
        *,
        auth: AuthPort,
        storage: SessionStorage,
        navigator: Navigator,
        config: SessionConfig | None = None,
    ) -> None:
        self._auth = auth
        self._storage = storage
        self._navigator = navigator
        self._config = config or load_config().session
        self._session = Session.unknown()
        self._restored = False
        self._in_flight = False
        self._lock = asyncio.Lock()
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def user(self) -> UserProfile | None:
        return self._session.user

    @property
    def in_flight(self) -> bool:
        """True while a login or signup request is pending."""

        return self._in_flight

    def restore(self) -> Session:
        if self._restored:
            logger.debug("session: restore already done")
            return self._session
        self._restored = True

        try:
            session = self._read_persisted()
        except MalformedPersistedSession as exc:
            logger.warning(f"session: ignoring persisted data ({exc.message})")
            session = Session.anonymous()

        self._set(session)
        logger.info(f"session: restored status={session.status.value}")
        return session

    async def login(self, credentials: Mapping[str, Any] | LoginRequestDTO) -> UserProfile:
        dto = self._validate(LoginRequestDTO, credentials)
        return await self._authenticate("login", self._auth.login, dto.model_dump())

    async def signup(self, profile: Mapping[str, Any] | SignupRequestDTO) -> UserProfile:
        dto = self._validate(SignupRequestDTO, profile)
        return await self._authenticate("signup", self._auth.signup, dto.to_payload())

    def logout(self) -> None:
        self._clear()
        logger.info("session: logged out")
        self._navigator.push(self._config.login_route)

    def handle_request_failure(self, exc: Exception) -> bool:
        """Drop the session when the API rejected our token.

        Returns True when the failure was an auth rejection and the view was
        sent to the login route.
        """

        if not isinstance(exc, RequestFailed) or not exc.is_auth_rejection:
            return False
        if self._session.status is not SessionStatus.AUTHENTICATED:
            return False
        logger.warning("session: token rejected by api, clearing session")
        self.logout()
        return True

    def gate(self, required_role: str | None = None) -> ViewGate:
        session = self._session
        if session.status is SessionStatus.UNKNOWN:
            return ViewGate.LOADING
        if session.status is SessionStatus.ANONYMOUS:
            return ViewGate.REDIRECT_LOGIN
        if required_role and not (session.user and session.user.has_role(required_role)):
            return ViewGate.REDIRECT_HOME
        return ViewGate.PROCEED

    def enforce(self, required_role: str | None = None) -> ViewGate:
        """Compute the gate and perform the redirect it asks for."""

        decision = self.gate(required_role)
        if decision is ViewGate.REDIRECT_LOGIN:
            self._navigator.push(self._config.login_route)
        elif decision is ViewGate.REDIRECT_HOME:
            self._navigator.push(self._config.home_route)
        return decision

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _authenticate(
        self,
        action: str,
        call: Callable[[Mapping[str, Any]], Awaitable[Any]],
        payload: Mapping[str, Any],
    ) -> UserProfile:
        async with self._lock:
            self._in_flight = True
            try:
                try:
                    data = await call(payload)
                except RequestFailed as exc:
                    logger.warning(f"session: {action} rejected status={exc.status}")
                    raise AuthenticationFailed.from_request_failure(exc) from exc
                token, user = self._parse_response(action, data)
                try:
                    self._persist(token, user)
                except OSError as exc:
                    logger.error(f"session: {action} could not persist session ({exc})")
                    raise AuthenticationFailed("Could not save session") from exc
                self._set(Session.authenticated(token, user))
            finally:
                self._in_flight = False

        logger.info(f"session: {action} ok user_id={user.id}")
        self._navigator.push(self._config.home_route)
        return user

    @staticmethod
    def _parse_response(action: str, data: Any) -> tuple[str, UserProfile]:
        try:
            dto = AuthResponseDTO.model_validate(data)
            user = UserProfile.from_mapping(AuthResponseDTO.profile_from(data))
        except (PydanticValidationError, InvariantViolation) as exc:
            logger.error(f"session: {action} response without usable token or profile")
            raise AuthenticationFailed() from exc
        return dto.token, user

    @staticmethod
    def _validate(model: type[DTO], data: Mapping[str, Any] | DTO) -> DTO:
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise AuthenticationFailed(
                first_error_message(exc), context=format_pydantic_errors(exc)
            ) from exc

    def _read_persisted(self) -> Session:
        token = self._storage.get(self._config.token_key)
        blob = self._storage.get(self._config.user_key)
        if not token or not blob:
            return Session.anonymous()
        try:
            raw = json.loads(blob)
        except ValueError as exc:
            raise MalformedPersistedSession(
                "user blob is not valid json", key=self._config.user_key
            ) from exc
        try:
            user = UserProfile.from_mapping(raw)
        except InvariantViolation as exc:
            raise MalformedPersistedSession(exc.message, key=self._config.user_key) from exc
        return Session.authenticated(token, user)

    def _persist(self, token: str, user: UserProfile) -> None:
        # token last: a user blob without a token restores as anonymous
        self._storage.set(self._config.user_key, json.dumps(user.to_dict()))
        self._storage.set(self._config.token_key, token)

    def _clear(self) -> None:
        self._storage.remove(self._config.token_key)
        self._storage.remove(self._config.user_key)
        self._set(Session.anonymous())

    def _set(self, session: Session) -> None:
        self._session = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                logger.exception("session: listener failed")


__all__ = ["SessionListener", "SessionManager"]
