"""Outbound HTTP request description.

Requests are built as plain values so providers can inspect and extend
them before the client hands them to the HTTP transport.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class OutboundRequest:
    """HTTP-shaped request built by the client and extended by providers."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    def with_header(self, name: str, value: str) -> OutboundRequest:
        """Return a copy of this request with the header set."""
        headers = dict(self.headers)
        headers[name] = value
        return replace(self, headers=headers)

    def get_header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None
