import logging
import time
from typing import Any, Dict, Optional

from ..config import IAM_GRANT_TYPE, IAM_TOKEN_URL, WatsonXConfig
from ..exceptions import SetupError, TransportError
from ..transport.base import Transport
from ..types import NEVER_EXPIRES, BearerCredential
from .cache import CredentialCache

logger = logging.getLogger("wxclient.auth")

_IAM_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded",
    "Accept": "application/json",
}


class TokenManager:
    """
    Hands out a valid credential, acquiring a new one only when the cache is
    empty, holds no token, or has expired.

    On IBM Cloud the API key is exchanged at the IAM identity endpoint for a
    short-lived bearer token. Elsewhere the API key itself is the credential
    and never expires.
    """
    def __init__(self, config: WatsonXConfig, transport: Transport, cache: Optional[CredentialCache] = None):
        self.config = config
        self.transport = transport
        self.cache = cache or CredentialCache()

    def _needs_refresh(self, credential: Optional[BearerCredential], now: float) -> bool:
        return (
            credential is None
            or not credential.token
            or credential.is_expired(now, margin=self.config.refresh_margin)
        )

    def _log_reuse(self, credential: BearerCredential, now: float):
        if credential.never_expires:
            logger.debug("Reusing API key credential")
        else:
            logger.debug(f"Reusing token (expires in {(credential.expires_at - now) / 60:.1f} mins)")

    def _iam_params(self) -> Dict[str, str]:
        return {"apikey": self.config.api_key or "", "grant_type": IAM_GRANT_TYPE}

    def _parse_token_response(self, data: Dict[str, Any]) -> BearerCredential:
        if not isinstance(data, dict):
            raise SetupError(f"Unexpected IAM token response: {data!r}")
        return BearerCredential(
            token=data.get("access_token"),
            expires_at=data.get("expiration") or 0,
        )

    def _key_credential(self) -> BearerCredential:
        return BearerCredential(token=self.config.api_key, expires_at=NEVER_EXPIRES)

    def _checked(self, credential: BearerCredential) -> BearerCredential:
        if not credential.token:
            raise SetupError("Something went wrong. Check your credentials, please.")
        return credential

    def acquire(self) -> BearerCredential:
        """Obtain a fresh credential without consulting the cache."""
        if not self.config.is_cloud:
            return self._checked(self._key_credential())

        logger.info("Requesting IAM access token")
        try:
            data = self.transport.send_form(IAM_TOKEN_URL, self._iam_params(), _IAM_HEADERS)
            credential = self._parse_token_response(data)
        except (TransportError, ValueError) as e:
            raise SetupError(f"IAM token request failed: {e}") from e
        return self._checked(credential)

    async def acquire_async(self) -> BearerCredential:
        """Async version of acquire."""
        if not self.config.is_cloud:
            return self._checked(self._key_credential())

        logger.info("Requesting IAM access token")
        try:
            data = await self.transport.send_form_async(IAM_TOKEN_URL, self._iam_params(), _IAM_HEADERS)
            credential = self._parse_token_response(data)
        except (TransportError, ValueError) as e:
            raise SetupError(f"IAM token request failed: {e}") from e
        return self._checked(credential)

    def get_valid_credential(self) -> BearerCredential:
        with self.cache.lock:
            now = time.time()
            credential = self.cache.credential
            if not self._needs_refresh(credential, now):
                self._log_reuse(credential, now)
                return credential
            credential = self.acquire()
            self.cache.set(credential)
            return credential

    async def get_valid_credential_async(self) -> BearerCredential:
        async with self.cache.async_lock:
            now = time.time()
            credential = self.cache.credential
            if not self._needs_refresh(credential, now):
                self._log_reuse(credential, now)
                return credential
            credential = await self.acquire_async()
            self.cache.set(credential)
            return credential
