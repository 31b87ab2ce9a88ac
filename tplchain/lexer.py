"""
Лексический анализатор текстовых шаблонов.

Разбивает тело шаблона на чередующуюся последовательность литерального
текста и директив. Распознаёт следующие конструкции:
- {% block name %}
- {% endblock %} / {% endblock name %}
- {% super %}
- {% extends name %} / {% extends "name" %}
- ${name}
- {# комментарий #}
- {% raw %}...{% endraw %}: содержимое выводится как есть
- $${: литеральная последовательность ${
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .errors import TemplateSyntaxError
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Лексер текстовых шаблонов.

    Всё, что не является директивой, переменной или комментарием,
    сохраняется как TEXT-токен байт в байт. Одиночный `{#` без
    закрывающего `#}` тоже остаётся текстом.
    """

    SPECIAL_PATTERN = re.compile(
        r"\{%\s*raw\s*%\}(?P<raw>.*?)\{%\s*endraw\s*%\}"
        r"|(?P<escape>\$\$\{)"
        r"|\{%(?P<directive>.*?)%\}"
        r"|\$\{(?P<variable>[^}]*)\}"
        r"|\{#(?P<comment>.*?)#\}",
        re.DOTALL,
    )

    NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*\Z")
    TEMPLATE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_./-]*\Z")
    IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

    # Незакрытая директива внутри литерального текста
    UNTERMINATED_PATTERN = re.compile(r"\{%")

    def __init__(self, text: str, template: Optional[str] = None):
        """
        Инициализирует лексер с исходным текстом.

        Args:
            text: Тело шаблона
            template: Имя шаблона (для сообщений об ошибках)
        """
        self.text = text
        self.template = template
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Разбивает текст на токены.

        Returns:
            Список токенов в порядке следования, завершённый EOF

        Raises:
            TemplateSyntaxError: При некорректной директиве
        """
        tokens: List[Token] = []
        current_pos = 0

        for match in self.SPECIAL_PATTERN.finditer(self.text):
            if current_pos < match.start():
                tokens.append(self._text_token(current_pos, match.start()))

            if match.group("raw") is not None:
                tokens.append(self._literal_token(match, match.group("raw")))
            elif match.group("escape") is not None:
                tokens.append(self._literal_token(match, "${"))
            elif match.group("directive") is not None:
                tokens.append(self._directive_token(match))
            elif match.group("variable") is not None:
                tokens.append(self._variable_token(match))
            else:
                tokens.append(self._make_token(TokenType.COMMENT, match, ""))

            current_pos = match.end()

        if current_pos < self.length:
            tokens.append(self._text_token(current_pos, self.length))

        line, column = self._line_col(self.length)
        tokens.append(Token(TokenType.EOF, "", "", self.length, line, column))

        logger.debug("Tokenized template %r into %d tokens", self.template, len(tokens))
        return tokens

    def _text_token(self, start: int, end: int) -> Token:
        value = self.text[start:end]

        unterminated = self.UNTERMINATED_PATTERN.search(value)
        if unterminated:
            line, column = self._line_col(start + unterminated.start())
            raise TemplateSyntaxError(
                f"Unterminated '{unterminated.group(0)}'", line, column, self.template
            )

        line, column = self._line_col(start)
        return Token(TokenType.TEXT, value, "", start, line, column)

    def _literal_token(self, match: re.Match, value: str) -> Token:
        """TEXT-токен для raw-секции или экранированной последовательности."""
        line, column = self._line_col(match.start())
        return Token(TokenType.TEXT, value, "", match.start(), line, column)

    def _directive_token(self, match: re.Match) -> Token:
        body = match.group("directive").strip()
        parts = body.split(None, 1)
        keyword = parts[0] if parts else ""
        rest = parts[1].strip() if len(parts) > 1 else ""

        if keyword == "block":
            if not self.NAME_PATTERN.match(rest):
                self._fail(f"Invalid block name {rest!r}", match)
            return self._make_token(TokenType.BLOCK, match, rest)

        if keyword == "endblock":
            if rest and not self.NAME_PATTERN.match(rest):
                self._fail(f"Invalid block name {rest!r}", match)
            return self._make_token(TokenType.ENDBLOCK, match, rest)

        if keyword == "super":
            if rest:
                self._fail("'super' takes no arguments", match)
            return self._make_token(TokenType.SUPER, match, "")

        if keyword == "extends":
            name = self._unquote(rest)
            if not self.TEMPLATE_NAME_PATTERN.match(name):
                self._fail(f"Invalid template name {rest!r}", match)
            return self._make_token(TokenType.EXTENDS, match, name)

        if keyword == "raw":
            self._fail("Unterminated 'raw' section", match)

        if keyword == "endraw":
            self._fail("'endraw' outside of raw section", match)

        self._fail(f"Unknown directive {body!r}", match)

    def _variable_token(self, match: re.Match) -> Token:
        name = match.group("variable").strip()
        if not self.IDENTIFIER_PATTERN.match(name):
            self._fail(f"Invalid variable name {name!r}", match)
        return self._make_token(TokenType.VARIABLE, match, name)

    def _make_token(self, token_type: TokenType, match: re.Match, arg: str) -> Token:
        line, column = self._line_col(match.start())
        return Token(token_type, match.group(0), arg, match.start(), line, column)

    def _fail(self, message: str, match: re.Match) -> None:
        line, column = self._line_col(match.start())
        raise TemplateSyntaxError(message, line, column, self.template)

    def _line_col(self, position: int) -> tuple[int, int]:
        line = self.text.count("\n", 0, position) + 1
        last_newline = self.text.rfind("\n", 0, position)
        return line, position - last_newline

    @staticmethod
    def _unquote(value: str) -> str:
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            return value[1:-1]
        return value


def tokenize_template(text: str, template: Optional[str] = None) -> List[Token]:
    """
    Удобная функция для токенизации текстового шаблона.

    Args:
        text: Тело шаблона
        template: Имя шаблона (для сообщений об ошибках)

    Returns:
        Список токенов
    """
    return TemplateLexer(text, template).tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
