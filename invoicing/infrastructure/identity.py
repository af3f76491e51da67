"""Header Identity Provider — reads the caller's owner id from a trusted header.

Invariants:
    - Returns None for a missing, empty, or non-UUID header (never raises)
    - Never verifies credentials: the upstream auth gateway already did, and
      strips any client-supplied copy of the header

Design Decisions:
    - Header name from settings.identity_header so deployments can match their gateway
"""

from collections.abc import Mapping
from uuid import UUID

from invoicing.core.domain_types import OwnerId


class HeaderIdentityProvider:
    """IdentityProvider backed by a single request header."""

    def __init__(self, header_name: str):
        self._header_name = header_name

    def resolve(self, headers: Mapping[str, str]) -> OwnerId | None:
        raw = (headers.get(self._header_name) or "").strip()
        if not raw:
            return None
        try:
            return OwnerId(UUID(raw))
        except ValueError:
            return None
