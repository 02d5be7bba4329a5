"""Continuation state carried between ``list`` calls.

The state maps a resource type id to that type's current cursor. At the
boundary it is serialized into an opaque token (url-safe base64 JSON).
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field

from scripts.carta_connector.errors import InvalidPageTokenError


@dataclass
class ContinuationState:
    cursors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_token(cls, token: str) -> "ContinuationState":
        """Parse an opaque token. An empty token is a fresh state."""
        if not token:
            return cls()
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
            data = json.loads(raw.decode("utf-8"))
        except (ValueError, binascii.Error, UnicodeError) as exc:
            raise InvalidPageTokenError(f"Invalid page token: {token!r}") from exc

        cursors = data.get("cursors") if isinstance(data, dict) else None
        if not isinstance(cursors, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in cursors.items()
        ):
            raise InvalidPageTokenError(f"Invalid page token: {token!r}")
        return cls(cursors=dict(cursors))

    def to_token(self) -> str:
        if not self.cursors:
            return ""
        raw = json.dumps({"cursors": self.cursors}, sort_keys=True, separators=(",", ":"))
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")

    def cursor_for(self, resource_type_id: str) -> str:
        return self.cursors.get(resource_type_id, "")

    def advance(self, resource_type_id: str, next_cursor: str) -> str:
        """Record the cursor for the next page and return the new token.

        An empty cursor finishes the resource type; the returned token is
        "" once no resource type has pages left.
        """
        if next_cursor:
            self.cursors[resource_type_id] = next_cursor
        else:
            self.cursors.pop(resource_type_id, None)
        return self.to_token()
