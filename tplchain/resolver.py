"""
Разрешение цепочки наследования шаблонов.

Рендеринг выполняется в три этапа:
1. Разбор шаблона и всех его предков до корня (цепочка лист → корень).
2. Разрешение super: проход от корня к листу, каждый плейсхолдер
   получает текст одноимённого блока ближайшего предка.
3. Компиляция: проход от листа к корню, значения блоков потомков
   замещают блоки предков; результат: текст корневого шаблона.

Этапы 2 и 3 выполняются линейными проходами по явно построенному
списку единиц, без рекурсии.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

from .capture import TemplateBuilder
from .errors import InheritanceDepthExceeded, RenderTimeout
from .execution import execute
from .sources import TemplateSourceProvider
from .unit import TemplateUnit

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def resolve_supers(chain: List[TemplateUnit]) -> Dict[str, str]:
    """
    Заполняет плейсхолдеры super во всей цепочке.

    Args:
        chain: Единицы от листа к корню

    Returns:
        Тексты блоков, видимые с уровня листа (имя → текст)
    """
    texts: Dict[str, str] = {}

    for unit in reversed(chain):
        for name, text in texts.items():
            block = unit.blocks.get(name)
            if block is not None:
                block.set_super(text)

        for name, block in unit.blocks.items():
            texts[name] = block.render()

    return texts


def compile_chain(chain: List[TemplateUnit]) -> str:
    """
    Поднимает значения блоков от листа к корню и возвращает текст корня.

    Для каждого имени блока побеждает значение самого специфичного
    (ближайшего к листу) шаблона.
    """
    values: Dict[str, str] = {}

    for unit in chain:
        for name, text in values.items():
            block = unit.blocks.get(name)
            if block is not None:
                block.set(text)

        for name, block in unit.blocks.items():
            values[name] = block.render()

    return chain[-1].render()


class ChainResolver:
    """
    Строит цепочку шаблонных единиц и выполняет все этапы рендеринга.

    Экземпляр не хранит состояния между вызовами render: дерево узлов
    и стек захвата создаются заново для каждого вызова.
    """

    def __init__(
        self,
        provider: TemplateSourceProvider,
        max_depth: int = DEFAULT_MAX_DEPTH,
        time_budget: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            provider: Источник шаблонов
            max_depth: Максимальная длина цепочки наследования
            time_budget: Лимит времени на один вызов render (секунды)
            clock: Источник монотонного времени
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.provider = provider
        self.max_depth = max_depth
        self.time_budget = time_budget
        self.clock = clock

    def render(self, name: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Рендерит шаблон с учётом всей цепочки наследования.

        Raises:
            TemplateError: Любая ошибка разбора или разрешения цепочки
        """
        deadline = self._deadline()
        chain = self.parse_chain(name, context, deadline)

        self._check_deadline(deadline, name)
        resolve_supers(chain)
        logger.debug("Resolved super references for %r", name)

        self._check_deadline(deadline, name)
        result = compile_chain(chain)
        logger.debug("Compiled %r through %d templates", name, len(chain))
        return result

    def parse_chain(
        self,
        name: str,
        context: Optional[Mapping[str, Any]] = None,
        deadline: Optional[float] = None,
    ) -> List[TemplateUnit]:
        """
        Разбирает шаблон и всех его предков.

        Returns:
            Единицы от листа к корню, связанные через parent
        """
        context = context or {}
        chain: List[TemplateUnit] = []
        current: Optional[str] = name

        while current is not None:
            if len(chain) >= self.max_depth:
                raise InheritanceDepthExceeded(self.max_depth, chain[-1].name)
            self._check_deadline(deadline, current)

            unit = self.parse_unit(current, context)
            if chain:
                chain[-1].parent = unit
            chain.append(unit)
            current = unit.parent_name

        logger.debug("Parsed chain %s", " -> ".join(u.name for u in chain))
        return chain

    def parse_unit(self, name: str, context: Mapping[str, Any]) -> TemplateUnit:
        """
        Разбирает одну шаблонную единицу.

        Отсутствие шаблона обнаруживается до создания состояния захвата.
        При любой ошибке все открытые области захвата закрываются до
        того, как исключение уходит выше.
        """
        source = self.provider.resolve(name)
        unit = TemplateUnit(name, origin=source.origin, source_kind=source.kind)
        builder = TemplateBuilder(unit)

        try:
            execute(source, builder, context)
            return builder.finish()
        except BaseException:
            builder.abort()
            raise

    def _deadline(self) -> Optional[float]:
        if self.time_budget is None:
            return None
        return self.clock() + self.time_budget

    def _check_deadline(self, deadline: Optional[float], name: str) -> None:
        if deadline is not None and self.clock() > deadline:
            raise RenderTimeout(self.time_budget, name)


__all__ = ["ChainResolver", "resolve_supers", "compile_chain", "DEFAULT_MAX_DEPTH"]
