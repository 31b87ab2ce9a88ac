"""
tplchain: шаблонизатор с иерархическим наследованием блоков.

Шаблон может объявить одного родителя, переопределять его именованные
блоки и вставлять текст родительской версии блока через super.
"""

from __future__ import annotations

from .capture import TemplateBuilder
from .engine import TemplateEngine
from .errors import (
    DuplicateBlockName,
    EndBlockOutsideBlock,
    InheritanceDepthExceeded,
    MultipleInheritance,
    RenderTimeout,
    SuperOutsideBlock,
    TemplateError,
    TemplateExecutionError,
    TemplateNotFound,
    TemplateSyntaxError,
    TplUserError,
    UnclosedBlock,
    UndefinedVariable,
)
from .sources import DictSourceProvider, FileSystemSourceProvider, TemplateSource, TemplateSourceProvider
from .view import View

__all__ = [
    "TemplateEngine",
    "TemplateBuilder",
    "View",
    "TemplateSource",
    "TemplateSourceProvider",
    "FileSystemSourceProvider",
    "DictSourceProvider",
    "TplUserError",
    "TemplateError",
    "TemplateNotFound",
    "DuplicateBlockName",
    "UnclosedBlock",
    "EndBlockOutsideBlock",
    "SuperOutsideBlock",
    "MultipleInheritance",
    "TemplateSyntaxError",
    "UndefinedVariable",
    "TemplateExecutionError",
    "InheritanceDepthExceeded",
    "RenderTimeout",
]
