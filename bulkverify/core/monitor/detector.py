from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .types import ActivitySample


class ActivitySampler(ABC):
    """Interface for measuring the Steam client's resource usage."""

    @abstractmethod
    def sample(self) -> Optional[ActivitySample]:
        """Point measurement, or None when no client process is running."""
        ...
