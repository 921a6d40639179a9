from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence


@dataclass(frozen=True)
class VersionedValue:
    """A stored value together with the store's write counter for its key."""

    value: Any
    version: int


class KeyValueStore(Protocol):
    """Key-prefix-addressable JSON store.

    ``set`` is a full replace (no merge). Callers read-modify-write whole values.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def get_by_prefix(self, prefix: str) -> Sequence[Any]:
        """Values whose keys start with ``prefix``, in no particular order."""

        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def get_versioned(self, key: str) -> Optional[VersionedValue]:
        raise NotImplementedError

    def set_if_version(self, key: str, value: Any, expected_version: int) -> bool:
        """Replace ``key`` only if its version is still ``expected_version``."""

        raise NotImplementedError
