"""
Узлы дерева шаблона.

Дерево шаблона строится из трёх видов узлов: литеральный текст,
плейсхолдер super и именованный блок. Вид узла хранится в явном
теге NodeKind, обработка выполняется сопоставлением по тегу.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class NodeKind(enum.Enum):
    """Вид узла дерева шаблона."""

    TEXT = "text"
    SUPER = "super"
    BLOCK = "block"
    UNIT = "unit"


@dataclass(eq=False)
class Node:
    """
    Базовый узел: необязательный content и упорядоченные дочерние узлы.

    Если content установлен, он замещает содержимое всех дочерних узлов.
    """
    kind: NodeKind
    content: Optional[str] = None
    children: List[Node] = field(default_factory=list)

    def render(self) -> str:
        """Возвращает content, а если он не задан, склейку дочерних узлов."""
        if self.content is not None:
            return self.content
        return "".join(child.render() for child in self.children)

    def set(self, text: str) -> None:
        """Устанавливает content узла."""
        self.content = text

    def append(self, node: Node) -> None:
        """Добавляет дочерний узел."""
        self.children.append(node)


class TextNode(Node):
    """Литеральный текст, фиксированный при создании."""

    def __init__(self, text: str):
        super().__init__(NodeKind.TEXT, text)


class SuperNode(Node):
    """
    Плейсхолдер для текста одноимённого блока ближайшего предка.

    Содержимое назначается один раз на этапе разрешения super;
    если ни один предок не определяет блок, плейсхолдер рендерится
    в пустую строку.
    """

    def __init__(self):
        super().__init__(NodeKind.SUPER)


class BlockNode(Node):
    """Именованный переопределяемый регион шаблона."""

    def __init__(self, name: str):
        super().__init__(NodeKind.BLOCK)
        self.name = name

    def set_super(self, text: str) -> None:
        """
        Заполняет непосредственные дочерние плейсхолдеры super.

        Вложенные блоки не затрагиваются: их super разрешаются
        отдельно, по их собственному имени.
        """
        for child in self.children:
            if child.kind is NodeKind.SUPER:
                child.set(text)

    def super_nodes(self) -> List[Node]:
        """Возвращает непосредственные дочерние плейсхолдеры super."""
        return [child for child in self.children if child.kind is NodeKind.SUPER]


def format_node_tree(node: Node, indent: int = 0) -> str:
    """Форматирует дерево узлов для отладки."""
    prefix = "  " * indent
    lines = []

    if node.kind is NodeKind.TEXT:
        text = node.content or ""
        preview = repr(text[:40] + "..." if len(text) > 40 else text)
        lines.append(f"{prefix}Text({preview})")
    elif node.kind is NodeKind.SUPER:
        state = "unset" if node.content is None else repr(node.content)
        lines.append(f"{prefix}Super({state})")
    elif node.kind is NodeKind.BLOCK:
        lines.append(f"{prefix}Block({getattr(node, 'name', '')!r})")
    else:
        lines.append(f"{prefix}Unit({getattr(node, 'name', '')!r})")

    for child in node.children:
        lines.append(format_node_tree(child, indent + 1))

    return "\n".join(lines)


__all__ = [
    "NodeKind",
    "Node",
    "TextNode",
    "SuperNode",
    "BlockNode",
    "format_node_tree",
]
