"""Base building block for catalog rows."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class Entity:
    """Catalog row identity. ``id`` stays ``None`` until the store assigns one."""

    id: int | None = None

    @property
    def key(self) -> int:
        if self.id is None:
            raise ValueError(f"{type(self).__name__} has not been persisted yet")
        return self.id
