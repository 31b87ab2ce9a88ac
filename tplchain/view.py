"""
Слой представления: хранит контекст и рендерит шаблоны с ним.
"""

from __future__ import annotations

import sys
from typing import IO, Any, Dict, Iterator, Mapping, MutableMapping, Optional

from .engine import TemplateEngine


class View(MutableMapping[str, Any]):
    """
    Контекст шаблонов плюс ссылка на шаблонизатор.

    Переменные задаются через set()/view[name] = value; render() без
    явного контекста использует накопленный.
    """

    def __init__(self, engine: TemplateEngine, **initial: Any):
        self.engine = engine
        self._context: Dict[str, Any] = dict(initial)

    def set(self, name: str, value: Any) -> None:
        self._context[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._context.get(name, default)

    @property
    def context(self) -> Dict[str, Any]:
        """Копия текущего контекста."""
        return dict(self._context)

    def __getitem__(self, name: str) -> Any:
        return self._context[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._context[name] = value

    def __delitem__(self, name: str) -> None:
        del self._context[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._context)

    def __len__(self) -> int:
        return len(self._context)

    def render(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Рендерит шаблон.

        Args:
            name: Имя шаблона
            context: Контекст вызова; если None, используется контекст View
        """
        ctx = self._context if context is None else context
        return self.engine.render(name, dict(ctx))

    def display(self, name: str, context: Optional[Mapping[str, Any]] = None,
                stream: Optional[IO[str]] = None) -> None:
        """Рендерит шаблон и выводит результат (по умолчанию в stdout)."""
        (stream or sys.stdout).write(self.render(name, context))


__all__ = ["View"]
