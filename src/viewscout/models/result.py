"""Tagged results returned by every external provider call.

Providers never raise and never return ``None``: a call either found the
value, confirmed there is nothing to find, or failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class NotFound:
    what: str = ""

    @property
    def ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default


@dataclass(frozen=True)
class ProviderError:
    provider: str
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default


ProviderResult = Union[Found[T], NotFound, ProviderError]
