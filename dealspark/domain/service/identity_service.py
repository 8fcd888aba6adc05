"""Identity gate domain service."""

from uuid import UUID

import logfire

from dealspark.config import AuthSettings
from dealspark.domain.error import Unauthenticated
from dealspark.domain.model import Principal
from dealspark.domain.value import Role, UserId
from dealspark.util.jwt import JWTError, verify_token

from .base import Service


class IdentityService(Service):
    """Resolves callers from identity tokens.

    Pure lookup: verifying a token never mutates anything.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def resolve(self, token: str | None) -> Principal:
        """Resolve the principal behind a token.

        Args:
            token: Identity token (JWT)

        Returns:
            Principal with user ID and role

        Raises:
            Unauthenticated: If the token is missing, malformed or expired
        """
        if not token:
            raise Unauthenticated("Authentication required")

        with logfire.span("identity_service.resolve"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Identity token rejected", error=str(e))
                raise Unauthenticated(str(e))

            try:
                user_id = UserId(UUID(payload.sub))
            except ValueError:
                logfire.warn("Identity token has malformed subject")
                raise Unauthenticated("Invalid token subject")

            role = Role.parse(payload.role)
            logfire.debug("Identity resolved", user_id=str(user_id), role=role.value)
            return Principal(user_id=user_id, role=role)

    def resolve_role(self, token: str | None) -> Role:
        """Resolve the caller's role.

        Raises:
            Unauthenticated: If the token is missing or invalid
        """
        return self.resolve(token).role

    def resolve_optional(self, token: str | None) -> Principal:
        """Resolve a principal for read paths.

        A missing or invalid token is treated as an anonymous caller instead
        of failing.
        """
        if not token:
            return Principal.anonymous()

        try:
            return self.resolve(token)
        except Unauthenticated as e:
            logfire.debug(
                "Identity verification failed, treating as anonymous", error=str(e)
            )
            return Principal.anonymous()
