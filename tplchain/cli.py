from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import load_config, load_context_file
from .errors import TplUserError
from .report import build_chain_report
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tplchain",
        description="Block-inheritance template renderer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--root",
        default=".",
        help="корень проекта (где лежит tplchain.yaml), по умолчанию текущий каталог",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="отладочный лог в stderr (также TPLCHAIN_DEBUG=1)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для render/chain
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("name", help="имя шаблона без расширения (например, pages/index)")
        sp.add_argument(
            "--var",
            action="append",
            metavar="KEY=VALUE",
            help="переменная контекста (можно указать несколько)",
        )
        sp.add_argument(
            "--context",
            metavar="FILE",
            help="YAML/JSON-файл с контекстом; --var перекрывает его значения",
        )

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    add_common(sp_render)

    sp_chain = sub.add_parser("chain", help="Цепочка наследования шаблона (JSON)")
    add_common(sp_chain)

    sub.add_parser("list", help="Список доступных шаблонов (JSON)")

    return p


def _dumps(obj: Any) -> str:
    # ensure_ascii=False: имена шаблонов и блоков выводятся как есть
    return json.dumps(obj, ensure_ascii=False)


def _setup_logging(debug: bool) -> None:
    log = logging.getLogger("tplchain")
    level = logging.DEBUG if debug or os.environ.get("TPLCHAIN_DEBUG") else logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _parse_vars(items: list[str] | None) -> Dict[str, str]:
    """Парсит список KEY=VALUE в словарь."""
    result: Dict[str, str] = {}
    if not items:
        return result

    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid variable format '{item}'. Expected 'KEY=VALUE'")
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Invalid variable format '{item}'. Empty key")
        result[key] = value
    return result


def _build_context(root: Path, ns: argparse.Namespace) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    context_file: Optional[str] = getattr(ns, "context", None)
    if context_file:
        path = Path(context_file)
        if not path.is_absolute():
            path = root / path
        context.update(load_context_file(path))
    context.update(_parse_vars(getattr(ns, "var", None)))
    return context


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.debug)

    try:
        root = Path(ns.root).resolve()
        engine = load_config(root).build_engine(root)

        if ns.cmd == "render":
            context = _build_context(root, ns)
            engine.render_to(ns.name, context, sys.stdout)
            return 0

        if ns.cmd == "chain":
            chain = engine.inspect_chain(ns.name, _build_context(root, ns))
            report = build_chain_report(ns.name, chain)
            sys.stdout.write(_dumps(report.model_dump(by_alias=True)))
            return 0

        if ns.cmd == "list":
            sys.stdout.write(_dumps({"templates": engine.list_templates()}))
            return 0

    except TplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
