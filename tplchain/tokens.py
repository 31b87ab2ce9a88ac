"""
Лексические типы для текстовых шаблонов.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов текстового шаблона."""

    TEXT = "TEXT"                # Литеральный текст
    BLOCK = "BLOCK"              # {% block name %}
    ENDBLOCK = "ENDBLOCK"        # {% endblock [name] %}
    SUPER = "SUPER"              # {% super %}
    EXTENDS = "EXTENDS"          # {% extends name %}
    VARIABLE = "VARIABLE"        # ${name}
    COMMENT = "COMMENT"          # {# ... #}
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: str           # Исходный текст токена (для TEXT: выводимый литерал)
    arg: str             # Аргумент директивы или имя переменной ("" если нет)
    position: int        # Позиция в исходном тексте
    line: int            # Номер строки (начиная с 1)
    column: int          # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
