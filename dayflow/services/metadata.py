"""
Open Graph metadata fetcher

Reads at most the <head> of a remote HTML page and extracts title, description,
preview image and favicon. Failures of any kind produce an empty result; the
fetcher never raises to its caller.

Redirects are followed by hand so that every hop is checked: at most
`max_redirects` hops, http(s) only, and (unless allowed in configuration) no
hosts that are localhost or literal private, loopback, link-local, reserved or
multicast addresses. Hostnames are not resolved, so DNS rebinding is not
covered.
"""

import asyncio
import html
import ipaddress
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlsplit

import httpx

from dayflow.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "DayFlow/1.0 (+https://dayflow.app)"
DEFAULT_TIMEOUT = 8.0
DEFAULT_MAX_BYTES = 100_000
DEFAULT_MAX_REDIRECTS = 5

TITLE_MAX = 500
DESCRIPTION_MAX = 2000

HEAD_END = b"</head>"


class UnsafeTargetError(ValueError):
    """The URL may not be fetched (scheme or host refused)"""


@dataclass(frozen=True)
class LinkMetadata:
    """Page metadata; every field is None when nothing was found"""

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    favicon: Optional[str] = None

    @classmethod
    def empty(cls) -> "LinkMetadata":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not any((self.title, self.description, self.image, self.favicon))

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


# ==================== Extraction ====================


def _meta_patterns(attr: str, value: str) -> List[re.Pattern]:
    """Both attribute orders of <meta {attr}="{value}" content="...">"""
    key = re.escape(value)
    return [
        re.compile(
            rf'<meta[^>]+{attr}="{key}"[^>]+content="([^"]*)"[^>]*>', re.IGNORECASE
        ),
        re.compile(
            rf'<meta[^>]+content="([^"]*)"[^>]+{attr}="{key}"[^>]*>', re.IGNORECASE
        ),
    ]


OG_TITLE_PATTERNS = _meta_patterns("property", "og:title")
TITLE_TAG_PATTERN = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)
OG_DESCRIPTION_PATTERNS = _meta_patterns("property", "og:description")
DESCRIPTION_PATTERNS = _meta_patterns("name", "description")
OG_IMAGE_PATTERNS = _meta_patterns("property", "og:image")
FAVICON_PATTERNS = [
    re.compile(
        r'<link[^>]+rel="(?:shortcut )?icon"[^>]+href="([^"]*)"[^>]*>', re.IGNORECASE
    ),
    re.compile(
        r'<link[^>]+href="([^"]*)"[^>]+rel="(?:shortcut )?icon"[^>]*>', re.IGNORECASE
    ),
]


def _first_match(page: str, patterns: List[re.Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(page)
        if match:
            return match.group(1)
    return None


def _clean_text(value: Optional[str], limit: int) -> Optional[str]:
    if value is None:
        return None
    text = html.unescape(value).strip()[:limit]
    return text or None


def resolve_against_origin(path: Optional[str], base_url: str) -> Optional[str]:
    """Absolute http(s) URLs pass through; anything else is rooted at the origin"""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    parts = urlsplit(base_url)
    origin = f"{parts.scheme}://{parts.netloc}"
    if path.startswith("//"):
        return f"{parts.scheme}:{path}"
    return urljoin(origin + "/", path.lstrip("/"))


def parse_metadata(page: str, base_url: str) -> LinkMetadata:
    """Extract metadata from (the head of) an HTML document"""
    title = _first_match(page, OG_TITLE_PATTERNS)
    if title is None:
        title = _first_match(page, [TITLE_TAG_PATTERN])

    description = _first_match(page, OG_DESCRIPTION_PATTERNS)
    if description is None:
        description = _first_match(page, DESCRIPTION_PATTERNS)

    image = _first_match(page, OG_IMAGE_PATTERNS)
    favicon = _first_match(page, FAVICON_PATTERNS) or "/favicon.ico"

    return LinkMetadata(
        title=_clean_text(title, TITLE_MAX),
        description=_clean_text(description, DESCRIPTION_MAX),
        image=resolve_against_origin(image, base_url),
        favicon=resolve_against_origin(favicon, base_url),
    )


# ==================== Target checks ====================


def check_target(url: str, allow_private_hosts: bool = False) -> None:
    """Raise UnsafeTargetError unless `url` is an http(s) URL to a public host"""
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise UnsafeTargetError(f"Unsupported scheme: {parts.scheme or '(none)'}")

    host = (parts.hostname or "").rstrip(".").lower()
    if not host:
        raise UnsafeTargetError("URL has no host")
    if allow_private_hosts:
        return

    if host == "localhost" or host.endswith(".localhost"):
        raise UnsafeTargetError(f"Refusing local host: {host}")

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        # A hostname, not a literal address
        return

    if (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_multicast
        or address.is_unspecified
    ):
        raise UnsafeTargetError(f"Refusing non-public address: {host}")


# ==================== Fetcher ====================


class MetadataFetcher:
    """Fetches link previews over httpx"""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        allow_private_hosts: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self.allow_private_hosts = allow_private_hosts
        self._transport = transport

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "MetadataFetcher":
        """Build from the [metadata] section of a ConfigLoader"""
        return cls(
            timeout=float(config.get("metadata.timeout", DEFAULT_TIMEOUT)),
            max_bytes=int(config.get("metadata.max_bytes", DEFAULT_MAX_BYTES)),
            user_agent=config.get("metadata.user_agent", DEFAULT_USER_AGENT),
            max_redirects=int(config.get("metadata.max_redirects", DEFAULT_MAX_REDIRECTS)),
            allow_private_hosts=bool(config.get("metadata.allow_private_hosts", False)),
            **kwargs,
        )

    async def fetch(self, url: str) -> LinkMetadata:
        """Fetch metadata for `url`; returns an empty result on any failure"""
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Metadata fetch timed out after {self.timeout}s: {url}")
        except Exception as e:
            logger.warning(f"Metadata fetch failed for {url}: {e}")
        return LinkMetadata.empty()

    async def _fetch(self, url: str) -> LinkMetadata:
        headers = {"User-Agent": self.user_agent, "Accept": "text/html"}
        async with httpx.AsyncClient(
            transport=self._transport,
            headers=headers,
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=False,
        ) as client:
            current = url
            for _ in range(self.max_redirects + 1):
                check_target(current, self.allow_private_hosts)

                async with client.stream("GET", current) as response:
                    if response.is_redirect:
                        current = urljoin(current, response.headers["location"])
                        logger.debug(f"Following redirect to {current}")
                        continue

                    if not response.is_success:
                        logger.debug(f"Metadata fetch got HTTP {response.status_code}: {current}")
                        return LinkMetadata.empty()

                    content_type = response.headers.get("content-type", "")
                    if "text/html" not in content_type.lower():
                        return LinkMetadata.empty()

                    page = await self._read_head(response)
                    return parse_metadata(page, current)

        logger.warning(f"Too many redirects (>{self.max_redirects}) for {url}")
        return LinkMetadata.empty()

    async def _read_head(self, response: httpx.Response) -> str:
        """Read until </head> or max_bytes, abandoning the rest of the body"""
        buffer = bytearray()
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) >= self.max_bytes or HEAD_END in buffer.lower():
                break
        return bytes(buffer[: self.max_bytes]).decode(
            response.encoding or "utf-8", errors="replace"
        )


async def fetch_open_graph(url: str, **kwargs: Any) -> LinkMetadata:
    """Convenience wrapper around a default MetadataFetcher"""
    return await MetadataFetcher(**kwargs).fetch(url)
