"""
Захват директив при выполнении тела шаблона.

TemplateBuilder: явный дескриптор, на котором тело шаблона вызывает
директивы. Всё состояние захвата (стек открытых узлов и буфер
накопленного текста) принадлежит одному экземпляру и живёт ровно
столько, сколько разбирается одна шаблонная единица.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Union

from .errors import (
    DuplicateBlockName,
    EndBlockOutsideBlock,
    MultipleInheritance,
    SuperOutsideBlock,
    UnclosedBlock,
)
from .nodes import BlockNode, Node, NodeKind, SuperNode, TextNode, format_node_tree
from .unit import TemplateUnit

logger = logging.getLogger(__name__)


class TemplateBuilder:
    """
    Строит дерево узлов одной шаблонной единицы.

    Состояния: корень единицы (глубина стека 1) и «внутри блока».
    begin_block кладёт блок на стек, end_block снимает его, emit_super
    допустим только внутри блока, set_parent однократно в любом
    состоянии. finish() требует, чтобы стек вернулся к глубине 1.
    """

    def __init__(self, unit: TemplateUnit):
        self.unit = unit
        self._stack: List[Node] = [unit]
        self._buffer: List[str] = []
        self._closed = False

    @property
    def depth(self) -> int:
        """Текущая глубина стека (1 означает корень единицы)."""
        return len(self._stack)

    @property
    def top(self) -> Node:
        return self._stack[-1]

    @property
    def closed(self) -> bool:
        return self._closed

    # ---- Литеральный текст ----

    def write(self, *parts: object) -> None:
        """
        Добавляет литеральный текст в буфер текущего узла.

        Нестроковые значения приводятся через str(), None пропускается.
        """
        self._ensure_open()
        for part in parts:
            if part is None:
                continue
            self._buffer.append(part if isinstance(part, str) else str(part))

    # ---- Директивы ----

    def begin_block(self, name: str) -> None:
        """Открывает именованный блок внутри текущего узла."""
        self._ensure_open()
        if name in self.unit.blocks:
            raise DuplicateBlockName(name, self.unit.name)

        self._flush()
        block = BlockNode(name)
        self.top.append(block)
        self.unit.blocks[name] = block
        self._stack.append(block)

    def end_block(self, name: Union[str, None] = None) -> None:
        """
        Закрывает текущий блок.

        Args:
            name: Если указано, должно совпадать с именем закрываемого блока
        """
        self._ensure_open()
        if len(self._stack) < 2:
            raise EndBlockOutsideBlock(self.unit.name)

        current = self.top
        if name is not None and name != current.name:
            raise UnclosedBlock(current.name, self.unit.name)

        self._flush()
        self._stack.pop()

    def emit_super(self) -> None:
        """Вставляет плейсхолдер для текста одноимённого блока предка."""
        self._ensure_open()
        if self.top.kind is not NodeKind.BLOCK:
            raise SuperOutsideBlock(self.unit.name)

        self._flush()
        self.top.append(SuperNode())

    def set_parent(self, name: str) -> None:
        """Объявляет родительский шаблон (не более одного)."""
        self._ensure_open()
        if self.unit.parent_name is not None:
            raise MultipleInheritance(name, self.unit.parent_name, self.unit.name)
        self.unit.parent_name = name

    @contextmanager
    def block(self, name: str) -> Iterator[TemplateBuilder]:
        """
        Контекстный менеджер для блока в Python-шаблонах.

        При исключении внутри тела блок не закрывается: исключение
        прерывает разбор всей единицы.
        """
        self.begin_block(name)
        yield self
        self.end_block(name)

    # ---- Завершение ----

    def finish(self) -> TemplateUnit:
        """
        Завершает разбор: сбрасывает остаток текста и проверяет, что все
        блоки закрыты.

        Raises:
            UnclosedBlock: Если остался открытый блок (называется самый
                вложенный)
        """
        self._ensure_open()
        if len(self._stack) > 1:
            raise UnclosedBlock(self.top.name, self.unit.name)

        self._flush()
        self._closed = True
        logger.debug(
            "Captured template %r: %d blocks, parent=%r",
            self.unit.name, len(self.unit.blocks), self.unit.parent_name,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Node tree of %r:\n%s", self.unit.name, format_node_tree(self.unit))
        return self.unit

    def abort(self) -> None:
        """Закрывает все открытые области захвата и отбрасывает буфер."""
        if self._closed:
            return
        if len(self._stack) > 1:
            logger.debug(
                "Aborting capture of %r with %d open scopes",
                self.unit.name, len(self._stack) - 1,
            )
        del self._stack[1:]
        self._buffer.clear()
        self._closed = True

    # ---- Внутреннее ----

    def _flush(self) -> None:
        if not self._buffer:
            return
        text = "".join(self._buffer)
        self._buffer.clear()
        if text:
            self.top.append(TextNode(text))

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"Capture of template '{self.unit.name}' is already closed")


__all__ = ["TemplateBuilder"]
