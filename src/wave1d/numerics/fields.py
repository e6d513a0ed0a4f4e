"""Double-buffered field storage.

Each field owns two preallocated buffers, one per temporal offset. Committing
a step flips which buffer is "current" instead of copying or reallocating.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..types import FIELD_ORDER, FieldName

__all__ = ["Field", "WaveFields"]


@dataclass(slots=True)
class Field:
    name: FieldName
    buffers: tuple[NDArray[np.floating], NDArray[np.floating]]
    current_index: int = 0

    @classmethod
    def zeros(cls, name: FieldName | str, n: int) -> Field:
        return cls(
            name=FieldName(name),
            buffers=(np.zeros(n, dtype=float), np.zeros(n, dtype=float)),
        )

    @property
    def current(self) -> NDArray[np.floating]:
        """Offset-0 buffer (known time level)."""
        return self.buffers[self.current_index]

    @property
    def advanced(self) -> NDArray[np.floating]:
        """Offset-1 buffer (time level being solved for)."""
        return self.buffers[1 - self.current_index]

    def level(self, offset: int) -> NDArray[np.floating]:
        if offset == 0:
            return self.current
        if offset == 1:
            return self.advanced
        raise ValueError(f"temporal offset must be 0 or 1, got {offset}")

    def seed_guess(self) -> None:
        np.copyto(self.advanced, self.current)

    def commit(self) -> None:
        self.current_index = 1 - self.current_index


@dataclass(slots=True)
class WaveFields:
    pp: Field
    pi: Field

    @classmethod
    def zeros(cls, n: int) -> WaveFields:
        return cls(pp=Field.zeros(FieldName.PP, n), pi=Field.zeros(FieldName.PI, n))

    @property
    def n(self) -> int:
        return int(self.pp.current.shape[0])

    def __getitem__(self, name: FieldName | str) -> Field:
        key = FieldName(name)
        return self.pp if key == FieldName.PP else self.pi

    def __iter__(self) -> Iterator[Field]:
        for name in FIELD_ORDER:
            yield self[name]

    def seed_guess(self) -> None:
        for f in self:
            f.seed_guess()

    def commit(self) -> None:
        for f in self:
            f.commit()
