"""Per-client configuration store.

Each Nexus client owns one ClientConfig. Sections are immutable Pydantic
models replaced wholesale by `update()`; a lock serializes access so a token
refresh on one thread never tears a read on another.
"""

import threading
from collections.abc import Callable
from typing import Any, Literal, TypeVar, overload

from pydantic import BaseModel, ConfigDict

from nexus_sdk.exceptions import NexusConfigError

DEFAULT_TIMEOUT = 30.0

S = TypeVar("S", bound=BaseModel)


class ApiSettings(BaseModel):
    """Where requests are sent."""

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None


class AuthSettings(BaseModel):
    """How requests are authenticated."""

    model_config = ConfigDict(frozen=True)

    access_token: str | None = None


class ClientConfig:
    """Thread-safe configuration store with named sections."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        access_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
    ) -> None:
        self._lock = threading.Lock()
        self._sections: dict[str, BaseModel] = {
            "api": ApiSettings(base_url=base_url),
            "auth": AuthSettings(access_token=access_token),
        }
        self.timeout = timeout
        self.debug = debug

    @overload
    def get(self, section: Literal["api"]) -> ApiSettings: ...

    @overload
    def get(self, section: Literal["auth"]) -> AuthSettings: ...

    def get(self, section: str) -> Any:
        """Return the current value of a section."""
        with self._lock:
            return self._lookup(section)

    def update(self, section: str, updater: Callable[[S], S]) -> S:
        """Replace a section with `updater(current)` and return the new value."""
        with self._lock:
            current = self._lookup(section)
            new_value = updater(current)  # type: ignore[arg-type]
            if not isinstance(new_value, type(current)):
                raise NexusConfigError(
                    f"Updater for section '{section}' returned "
                    f"{type(new_value).__name__}, expected {type(current).__name__}"
                )
            self._sections[section] = new_value
            return new_value

    def _lookup(self, section: str) -> BaseModel:
        try:
            return self._sections[section]
        except KeyError:
            raise NexusConfigError(f"Unknown configuration section: {section!r}") from None

    @property
    def base_url(self) -> str | None:
        return self.get("api").base_url

    @property
    def access_token(self) -> str | None:
        return self.get("auth").access_token

    def set_access_token(self, token: str | None) -> None:
        self.update("auth", lambda auth: auth.model_copy(update={"access_token": token}))

    def set_base_url(self, base_url: str | None) -> None:
        self.update("api", lambda api: api.model_copy(update={"base_url": base_url}))
