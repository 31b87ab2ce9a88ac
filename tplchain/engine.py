"""
Точка входа рендеринга.
"""

from __future__ import annotations

import logging
from typing import IO, Any, List, Mapping, Optional

from .resolver import DEFAULT_MAX_DEPTH, ChainResolver
from .sources import TemplateSourceProvider
from .unit import TemplateUnit

logger = logging.getLogger(__name__)


class TemplateEngine:
    """
    Шаблонизатор с наследованием блоков.

    Хранит только неизменяемые настройки и ссылку на источник шаблонов,
    поэтому один экземпляр можно использовать из нескольких потоков:
    каждый вызов render строит собственную цепочку единиц.
    """

    def __init__(
        self,
        provider: TemplateSourceProvider,
        max_depth: int = DEFAULT_MAX_DEPTH,
        time_budget: Optional[float] = None,
    ):
        self.provider = provider
        self.max_depth = max_depth
        self.time_budget = time_budget

    def _resolver(self) -> ChainResolver:
        return ChainResolver(self.provider, max_depth=self.max_depth, time_budget=self.time_budget)

    def render(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Рендерит шаблон.

        Args:
            name: Имя шаблона
            context: Переменные, доступные телу шаблона и его предков

        Returns:
            Итоговый текст корневого шаблона цепочки
        """
        logger.debug("Rendering %r", name)
        return self._resolver().render(name, context or {})

    def render_to(self, name: str, context: Optional[Mapping[str, Any]], stream: IO[str]) -> None:
        """Рендерит шаблон и пишет результат в поток."""
        stream.write(self.render(name, context))

    def inspect_chain(self, name: str, context: Optional[Mapping[str, Any]] = None) -> List[TemplateUnit]:
        """
        Разбирает цепочку без этапов super и компиляции.

        Returns:
            Единицы от листа к корню
        """
        return self._resolver().parse_chain(name, context or {})

    def exists(self, name: str) -> bool:
        return self.provider.exists(name)

    def list_templates(self) -> List[str]:
        return self.provider.list_names()


__all__ = ["TemplateEngine"]
