"""
Named component registry with include/exclude filtering
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Maps names to factories; creates each allowed component once"""

    def __init__(self, kind: str):
        self.kind = kind
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._instances: Dict[str, Any] = {}
        self._include: List[str] = []
        self._exclude: List[str] = []

    def register(self, name: str, factory: Callable[[], Any]):
        self._factories[name] = factory
        self._instances.pop(name, None)

    def apply_filters(self, include: Optional[Iterable[str]] = None, exclude: Optional[Iterable[str]] = None):
        """A non-empty include list allows only those names; exclude always wins"""
        self._include = list(include or [])
        self._exclude = list(exclude or [])
        unknown = [n for n in self._include + self._exclude if n not in self._factories]
        if unknown:
            logger.warning(f"Unknown {self.kind} in filters: {', '.join(unknown)}")

    def is_allowed(self, name: str) -> bool:
        if name not in self._factories:
            return False
        if self._include and name not in self._include:
            return False
        return name not in self._exclude

    def names(self) -> List[str]:
        return [name for name in self._factories if self.is_allowed(name)]

    def create(self, name: str) -> Any:
        if not self.is_allowed(name):
            raise KeyError(f"Unknown {self.kind}: {name}")

        if name not in self._instances:
            self._instances[name] = self._factories[name]()
        return self._instances[name]

    def create_all(self) -> List[Any]:
        return [self.create(name) for name in self.names()]
