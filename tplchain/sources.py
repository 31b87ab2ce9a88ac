"""
Template source providers.

A provider maps a template name (a POSIX-style relative path such as
``layouts/base``) to its source text. The engine only depends on the
TemplateSourceProvider protocol; base directories and extensions are
configured outside the rendering core.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Protocol, Sequence, Union

from .errors import TemplateNotFound

logger = logging.getLogger(__name__)

SourceKind = Literal["text", "python"]

DEFAULT_EXTENSIONS: tuple[str, ...] = (".tpl", ".tpl.py")


@dataclass(frozen=True)
class TemplateSource:
    """Resolved template body."""
    name: str
    text: str
    kind: SourceKind = "text"
    origin: str = ""  # file path or other human-readable location


class TemplateSourceProvider(Protocol):
    """Contract for anything that can supply template bodies."""

    def exists(self, name: str) -> bool:
        ...

    def resolve(self, name: str) -> TemplateSource:
        """Raises TemplateNotFound when the name cannot be resolved."""
        ...

    def list_names(self) -> List[str]:
        ...


def kind_for_path(path: Union[str, Path]) -> SourceKind:
    """Python templates are recognised by the .py suffix."""
    return "python" if str(path).endswith(".py") else "text"


class FileSystemSourceProvider:
    """
    Looks templates up in one or more base directories.

    A name is resolved by trying every directory in order and, within a
    directory, every extension in order; the first existing file wins.
    """

    def __init__(
        self,
        search_path: Union[str, Path, Sequence[Union[str, Path]]],
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        encoding: str = "utf-8",
    ):
        if isinstance(search_path, (str, Path)):
            search_path = [search_path]
        self.search_path: List[Path] = [Path(p).resolve() for p in search_path]
        self.extensions: List[str] = list(extensions)
        self.encoding = encoding
        if not self.extensions:
            raise ValueError("At least one template extension is required")

    def _candidates(self, name: str) -> List[Path]:
        rel = PurePosixPath(name)
        if not name or rel.is_absolute() or ".." in rel.parts:
            return []
        out: List[Path] = []
        for base in self.search_path:
            for ext in self.extensions:
                out.append(base.joinpath(*rel.parts[:-1], rel.name + ext))
        return out

    def find(self, name: str) -> Optional[Path]:
        """Returns the file a name resolves to, or None."""
        for candidate in self._candidates(name):
            resolved = candidate.resolve()
            if not any(resolved.is_relative_to(base) for base in self.search_path):
                continue
            if resolved.is_file():
                return resolved
        return None

    def exists(self, name: str) -> bool:
        return self.find(name) is not None

    def resolve(self, name: str) -> TemplateSource:
        path = self.find(name)
        if path is None:
            raise TemplateNotFound(name, [str(p) for p in self._candidates(name)])
        logger.debug("Resolved template %r to %s", name, path)
        return TemplateSource(
            name=name,
            text=path.read_text(encoding=self.encoding),
            kind=kind_for_path(path),
            origin=str(path),
        )

    def list_names(self) -> List[str]:
        """All template names visible through the search path, sorted."""
        names = set()
        for base in self.search_path:
            if not base.is_dir():
                continue
            for path in base.rglob("*"):
                if not path.is_file():
                    continue
                rel = path.relative_to(base).as_posix()
                for ext in self.extensions:
                    if rel.endswith(ext):
                        names.add(rel[: -len(ext)])
                        break
        return sorted(names)


class DictSourceProvider:
    """
    In-memory provider.

    Plain string values are text templates; TemplateSource values are
    used as given (which is how Python templates are supplied).
    """

    def __init__(self, templates: Optional[Mapping[str, Union[str, TemplateSource]]] = None):
        self._templates: Dict[str, Union[str, TemplateSource]] = dict(templates or {})

    def add(self, name: str, body: Union[str, TemplateSource]) -> None:
        self._templates[name] = body

    def exists(self, name: str) -> bool:
        return name in self._templates

    def resolve(self, name: str) -> TemplateSource:
        if name not in self._templates:
            raise TemplateNotFound(name)
        body = self._templates[name]
        if isinstance(body, TemplateSource):
            return body
        return TemplateSource(name=name, text=body, kind="text", origin=f"<memory:{name}>")

    def list_names(self) -> List[str]:
        return sorted(self._templates)


__all__ = [
    "SourceKind",
    "DEFAULT_EXTENSIONS",
    "TemplateSource",
    "TemplateSourceProvider",
    "FileSystemSourceProvider",
    "DictSourceProvider",
    "kind_for_path",
]
