# symptom_intake/auth.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

import httpx
from fastapi import Depends, Header
from supabase import Client, create_client
from supabase import AuthError as SupabaseAuthError

from symptom_intake.config import get_settings
from symptom_intake.errors import AuthError, ConfigurationError

logger = logging.getLogger(__name__)


class IdentityProvider(ABC):
    """
    Resolves a bearer token to the id of the user it was issued to.
    """

    @abstractmethod
    def get_user_id(self, token: str) -> Optional[str]:
        """Return the user id, or None if the token is not valid."""
        ...


class SupabaseIdentityProvider(IdentityProvider):
    """
    Verifies access tokens against the hosted auth service.
    """

    def __init__(self):
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment (.env)."
            )
        self.client: Client = create_client(
            settings.supabase_url, settings.supabase_anon_key
        )

    def get_user_id(self, token: str) -> Optional[str]:
        try:
            response = self.client.auth.get_user(token)
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            logger.info("Token verification failed: %s", exc)
            return None

        if response is None or response.user is None:
            return None
        return response.user.id


@lru_cache(maxsize=1)
def _build_identity_provider() -> IdentityProvider:
    return SupabaseIdentityProvider()


def get_identity_provider() -> IdentityProvider:
    try:
        return _build_identity_provider()
    except RuntimeError as exc:
        logger.error("Identity provider unavailable: %s", exc)
        raise ConfigurationError("Sign-in is not configured") from exc


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> str:
    """
    FastAPI dependency: the authenticated user's id, or AuthError.
    """
    token = _bearer_token(authorization)
    if token is None:
        raise AuthError()

    user_id = identity.get_user_id(token)
    if not user_id:
        raise AuthError()
    return user_id
