# cyselenium/registry.py
# Custom-command registry: the ordered set of command names learned by a
# `collect` run and consulted by `convert` runs. Persisted one name per line.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Union

logger = logging.getLogger(__name__)


class CommandRegistry:
    def __init__(self, names: Iterable[str] = ()):
        self._names: Dict[str, None] = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> None:
        name = (name or "").strip()
        if name:
            self._names.setdefault(name, None)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CommandRegistry":
        p = Path(path)
        if not p.is_file():
            logger.debug("no command registry at %s; starting empty", p)
            return cls()
        registry = cls(p.read_text(encoding="utf-8").split("\n"))
        logger.debug("loaded %d custom commands from %s", len(registry), p)
        return registry

    def save(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("\n".join(self._names), encoding="utf-8")
        return p
