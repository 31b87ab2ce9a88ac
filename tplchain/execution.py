"""
Выполнение тела шаблона поверх TemplateBuilder.

Текстовые шаблоны предварительно разбираются лексером в поток
текст/директива, Python-шаблоны исполняются с явным дескриптором
`tpl` в глобальном пространстве имён. В обоих случаях директивы
вызываются на одном и том же builder.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from .capture import TemplateBuilder
from .errors import TemplateError, TemplateExecutionError, UndefinedVariable
from .lexer import tokenize_template
from .sources import TemplateSource
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Имя, под которым builder доступен в Python-шаблонах
HANDLE_NAME = "tpl"


def run_text_template(source: TemplateSource, builder: TemplateBuilder,
                      context: Mapping[str, Any]) -> None:
    """
    Прогоняет токены текстового шаблона через builder.

    Args:
        source: Исходник шаблона
        builder: Дескриптор захвата для этой единицы
        context: Переменные для подстановки ${name}
    """
    tokens = tokenize_template(source.text, source.name)

    handlers: Dict[TokenType, Callable[[Token], None]] = {
        TokenType.TEXT: lambda t: builder.write(t.value),
        TokenType.BLOCK: lambda t: builder.begin_block(t.arg),
        TokenType.ENDBLOCK: lambda t: builder.end_block(t.arg or None),
        TokenType.SUPER: lambda t: builder.emit_super(),
        TokenType.EXTENDS: lambda t: builder.set_parent(t.arg),
        TokenType.VARIABLE: lambda t: builder.write(_lookup(context, t.arg, source.name)),
        TokenType.COMMENT: lambda t: None,
        TokenType.EOF: lambda t: None,
    }

    for token in tokens:
        handlers[token.type](token)


def run_python_template(source: TemplateSource, builder: TemplateBuilder,
                        context: Mapping[str, Any]) -> None:
    """
    Исполняет Python-шаблон.

    Контекст становится глобальными переменными тела, builder доступен
    как `tpl`. Ошибки шаблонизатора пробрасываются как есть, прочие
    исключения оборачиваются в TemplateExecutionError.
    """
    namespace: Dict[str, Any] = dict(context)
    namespace[HANDLE_NAME] = builder
    namespace["__name__"] = f"tplchain.templates.{source.name.replace('/', '.')}"

    try:
        code = compile(source.text, source.origin or source.name, "exec")
        exec(code, namespace)
    except TemplateError:
        raise
    except Exception as e:
        raise TemplateExecutionError(e, source.name) from e


def execute(source: TemplateSource, builder: TemplateBuilder,
            context: Mapping[str, Any]) -> None:
    """Выбирает способ выполнения по виду исходника."""
    logger.debug("Executing %s template %r", source.kind, source.name)
    if source.kind == "python":
        run_python_template(source, builder, context)
    else:
        run_text_template(source, builder, context)


def _lookup(context: Mapping[str, Any], name: str, template: str) -> Any:
    if name not in context:
        raise UndefinedVariable(name, template)
    return context[name]


__all__ = ["HANDLE_NAME", "execute", "run_text_template", "run_python_template"]
