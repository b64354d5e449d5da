"""
Caller identity resolution

Every API route except the health check needs a resolved identity. The identity
provider is an external collaborator; two implementations ship here:

- StaticTokenIdentityProvider: bearer tokens mapped to users in [auth.tokens]
  (development and tests)
- RemoteIdentityProvider: asks an external auth service who a token belongs to
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from dayflow.core.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller"""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class IdentityProvider(Protocol):
    """Protocol for resolving a bearer token to an identity"""

    async def resolve(self, token: str) -> Optional[Identity]:
        """Return the identity for `token`, or None when it is not valid"""
        ...


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class StaticTokenIdentityProvider:
    """Tokens configured up front

    [auth.tokens] maps a token either to a user id string or to a table with
    `id`, `email` and `name`.
    """

    def __init__(self, tokens: Optional[Mapping[str, Any]] = None):
        self._identities: Dict[str, Identity] = {}
        for token, entry in (tokens or {}).items():
            if isinstance(entry, Mapping):
                identity = Identity(
                    id=str(entry["id"]), email=entry.get("email"), name=entry.get("name")
                )
            else:
                identity = Identity(id=str(entry))
            self._identities[token] = identity

    async def resolve(self, token: str) -> Optional[Identity]:
        return self._identities.get(token)


class RemoteIdentityProvider:
    """Resolve tokens against an auth service's user endpoint

    The service is expected to answer GET <url> (with the caller's bearer token)
    with a JSON user object holding at least `id`.
    """

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def resolve(self, token: str) -> Optional[Identity]:
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=httpx.Timeout(self.timeout)
            ) as client:
                response = await client.get(self.url, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Identity service request failed: {e}")
            return None

        if response.status_code != 200:
            logger.debug(f"Identity service rejected token: HTTP {response.status_code}")
            return None

        try:
            user = response.json()
        except ValueError:
            logger.warning("Identity service returned a non-JSON body")
            return None

        if not isinstance(user, dict) or not user.get("id"):
            return None

        metadata = user.get("user_metadata") or {}
        return Identity(
            id=str(user["id"]),
            email=user.get("email"),
            name=metadata.get("full_name") if isinstance(metadata, dict) else None,
        )


def create_identity_provider(config: Any) -> IdentityProvider:
    """Build the provider selected by `auth.provider`"""
    provider = config.get("auth.provider", "static")
    if provider == "remote":
        url = config.get("auth.url", "")
        if not url:
            raise ValueError("auth.url is required for the remote identity provider")
        logger.info(f"Using remote identity provider: {url}")
        return RemoteIdentityProvider(url, api_key=config.get("auth.api_key", ""))
    if provider == "static":
        tokens = config.get("auth.tokens", {}) or {}
        logger.info(f"Using static identity provider with {len(tokens)} tokens")
        return StaticTokenIdentityProvider(tokens)
    raise ValueError(f"Unknown auth provider: {provider}")
