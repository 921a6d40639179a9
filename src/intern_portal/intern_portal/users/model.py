from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminIdentity:
    """The single dashboard admin, loaded from settings at startup."""

    username: str
    password_hash: str
