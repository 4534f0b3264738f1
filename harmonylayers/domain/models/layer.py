"""Layer record stored in the ``harmony_config`` table."""

from __future__ import annotations

from dataclasses import dataclass

BASE_LAYER = "base"


@dataclass(frozen=True)
class Layer:
    """A named configuration blob.

    Only layers with non-empty ``config`` take part in title listing; a row
    whose content was blanked keeps its title reserved in the table but is
    otherwise invisible.
    """

    title: str
    config: str

    @property
    def is_base(self) -> bool:
        return self.title == BASE_LAYER

    @property
    def is_empty(self) -> bool:
        return len(self.config) == 0

    @property
    def size(self) -> int:
        return len(self.config.encode("utf-8"))
