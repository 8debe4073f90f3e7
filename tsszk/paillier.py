"""Paillier public key as consumed by the MtA range proof."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PublicKey:
    """
    Paillier public key  (N, Γ).

    Γ defaults to the usual  N + 1.  Only the integers are used here;
    encryption lives with the protocol code.
    """

    n: int
    gamma: Optional[int] = field(default=None)

    def __post_init__(self) -> None:
        if self.gamma is None:
            object.__setattr__(self, "gamma", self.n + 1)

    @property
    def n_square(self) -> int:
        return self.n * self.n

    def as_ints(self) -> List[int]:
        """Key material in challenge-hash order:  [N, Γ]."""
        return [self.n, self.gamma]
