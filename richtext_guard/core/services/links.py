"""
External link sanitization.

Documents cannot carry links (markDefs is always dropped), so nothing in
the default pipeline calls this. It is the one place a caller should go
through before exposing an external URL as a clickable reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit, urlunsplit

ALLOWED_LINK_SCHEMES = frozenset(["http", "https"])
DEFAULT_PORTS = {"http": 80, "https": 443}
EXTERNAL_LINK_REL = "nofollow noopener noreferrer"
EXTERNAL_LINK_TARGET = "_blank"

HOSTNAME_PATTERN = re.compile(r"^[a-z0-9.-]+$|^\[[0-9a-f:.]+\]$")


@dataclass(frozen=True)
class ExternalLink:
    """Normalized external link with fixed safety attributes."""

    href: str
    rel: str = EXTERNAL_LINK_REL
    target: str = EXTERNAL_LINK_TARGET

    def to_dict(self) -> dict[str, Any]:
        return {"href": self.href, "rel": self.rel, "target": self.target}


def sanitize_external_link(url: object) -> ExternalLink | None:
    """
    Validate and normalize an external URL.

    Only absolute http/https URLs with a valid host are accepted.
    Internationalized hosts are returned in their punycode form.
    Returns None for anything else, including javascript:, data: and ftp:.
    """
    if not isinstance(url, str):
        return None

    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_LINK_SCHEMES:
        return None

    host = parts.hostname
    if not host:
        return None
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return None
    if ":" in host:
        host = f"[{host}]"
    if not HOSTNAME_PATTERN.match(host):
        return None

    netloc = host
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    href = urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))
    return ExternalLink(href=href)
