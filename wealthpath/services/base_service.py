from __future__ import annotations

from abc import ABC, abstractmethod

from wealthpath.core.schemas import PlanRequest, PlanResponse


class BaseService(ABC):
    """All plan services implement this interface."""

    name: str

    @abstractmethod
    def run(self, req: PlanRequest) -> PlanResponse:
        raise NotImplementedError
