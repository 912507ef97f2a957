#!/usr/bin/env python3
"""
Keep github_projects_mcp.core free of MCP-server and web-framework imports,
so the tools can run under any adapter. Exits non-zero listing offenders.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "github_projects_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "fastmcp",
    "starlette",
    "fastapi",
    "uvicorn",
    "github_projects_mcp.server",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def _absolute_imports(tree: ast.AST) -> Iterator[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            yield from (alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.module


def scan_file(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(), filename=str(path))
    return [
        f"{path}: forbidden import '{name}'"
        for name in _absolute_imports(tree)
        if is_forbidden(name)
    ]


def main() -> int:
    violations = [v for f in sorted(CORE_DIR.rglob("*.py")) for v in scan_file(f)]
    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
