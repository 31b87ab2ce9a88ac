"""
JSON report schemas for the CLI.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .unit import TemplateUnit


class UnitInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    origin: str
    kind: str
    blocks: List[str] = Field(default_factory=list)
    parent: Optional[str] = None


class ChainReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    template: str
    depth: int
    chain: List[UnitInfo] = Field(default_factory=list)
    block_names: List[str] = Field(default_factory=list, alias="blockNames")


def build_chain_report(name: str, chain: List[TemplateUnit]) -> ChainReport:
    """Describes a parsed chain, leaf first."""
    seen: List[str] = []
    units: List[UnitInfo] = []
    for unit in chain:
        units.append(UnitInfo(
            name=unit.name,
            origin=unit.origin,
            kind=unit.source_kind,
            blocks=list(unit.blocks),
            parent=unit.parent_name,
        ))
        for block in unit.blocks:
            if block not in seen:
                seen.append(block)
    return ChainReport(template=name, depth=len(chain), chain=units, block_names=seen)


__all__ = ["UnitInfo", "ChainReport", "build_chain_report"]
