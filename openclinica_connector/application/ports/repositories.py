from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.item_rows import ItemColumnMapping, ItemRow


@runtime_checkable
class ItemRowRepositoryPort(Protocol):
    pass

    def read(
        self, path: str | Path, mapping: ItemColumnMapping | None = None
    ) -> list[ItemRow]: ...
