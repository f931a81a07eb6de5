from __future__ import annotations

from omnistore.state.store import Store


class CountingStore(Store):
    """Store that records every save attempt."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.saves = 0

    def save(self, path=None) -> bool:
        self.saves += 1
        return super().save(path)
