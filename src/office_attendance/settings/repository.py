from __future__ import annotations

from typing import Protocol

from .model import Thresholds


class SettingsRepository(Protocol):
    def get_thresholds(self) -> Thresholds:
        raise NotImplementedError
