"""Twitter resource owner mapping."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from oauth2_twitter.client.models.errors import MissingFieldError


class TwitterResourceOwner:
    """Authenticated Twitter user from the ``/2/users/me`` response.

    The API wraps the user object in a ``data`` envelope; only that inner
    object is kept. A response without ``data`` yields an empty owner whose
    required accessors raise ``MissingFieldError``.
    """

    def __init__(self, response: Mapping[str, Any]):
        data = response.get("data") if isinstance(response, Mapping) else None
        self._data: dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}

    def _require(self, field: str) -> Any:
        try:
            return self._data[field]
        except KeyError:
            raise MissingFieldError(field) from None

    @property
    def id(self) -> str:
        return self._require("id")

    @property
    def name(self) -> str:
        return self._require("name")

    @property
    def username(self) -> str:
        return self._require("username")

    @property
    def profile_image_url(self) -> str:
        return self._require("profile_image_url")

    def get(self, key: str, default: Any = None) -> Any:
        """Look up any field, returning ``default`` when it is absent."""
        return self._data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return the user object as received."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"TwitterResourceOwner(id={self._data.get('id')!r})"
