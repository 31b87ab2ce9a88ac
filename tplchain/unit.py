"""
Шаблонная единица: один разобранный шаблон, звено цепочки наследования.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .nodes import BlockNode, Node, NodeKind


class TemplateUnit(Node):
    """
    Корень дерева одного шаблона.

    Владеет картой блоков (имя → BlockNode, в порядке объявления),
    именем родительского шаблона и ссылкой на разобранного родителя.
    """

    def __init__(self, name: str, origin: str = "", source_kind: str = "text"):
        super().__init__(NodeKind.UNIT)
        self.name = name
        self.origin = origin or name
        self.source_kind = source_kind
        self.blocks: Dict[str, BlockNode] = {}
        self.parent_name: Optional[str] = None
        self.parent: Optional[TemplateUnit] = None

    def ancestors(self) -> Iterator[TemplateUnit]:
        """Идёт по цепочке от родителя к корню."""
        unit = self.parent
        while unit is not None:
            yield unit
            unit = unit.parent

    def chain(self) -> List[TemplateUnit]:
        """Цепочка от этого шаблона (лист) до корня."""
        return [self, *self.ancestors()]

    def __repr__(self) -> str:
        return (
            f"TemplateUnit({self.name!r}, blocks={list(self.blocks)}, "
            f"parent={self.parent_name!r})"
        )


__all__ = ["TemplateUnit"]
