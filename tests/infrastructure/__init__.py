"""
Unified test infrastructure for tplchain.

Modules:
- file_utils: Utilities for creating template files and project layouts
- cli_utils: Utilities for running the CLI in a subprocess
"""

from .file_utils import write, write_templates
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "write_templates",
    "run_cli",
    "jload",
]
