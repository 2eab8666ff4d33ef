"""
Structured-literal codec: settings stored as a Python literal.

Files look like::

    # Generated by config_tree.
    CONFIG = {
        'app': {'name': 'demo', 'debug': False},
    }

Decoding parses the source with :mod:`ast` and evaluates the single literal
with :func:`ast.literal_eval`. Nothing in the file is executed, so calls,
names, comprehensions and imports are rejected rather than run.
"""

from __future__ import annotations

import ast
import logging
import pprint
from typing import Any, Dict, List, Mapping

from config_tree.exceptions import SerializationError
from config_tree.formats import ConfigFormat

from .base import _ensure_mapping

logger = logging.getLogger("config_tree.serialization")
logger.addHandler(logging.NullHandler())

HEADER = "# Generated by config_tree. Only literal values are allowed in this file.\n"
ASSIGNMENT_NAME = "CONFIG"


class LiteralCodec:
    format = ConfigFormat.STRUCTURED

    def __init__(self, width: int = 88) -> None:
        self._width = width

    def encode(self, tree: Mapping[str, Any]) -> str:
        body = pprint.pformat(dict(tree), indent=4, width=self._width, sort_dicts=False)
        # pformat falls back to repr() for unknown objects; only accept output
        # that parses back as a literal.
        try:
            ast.literal_eval(body)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError) as e:
            logger.error("Settings tree is not representable as a literal: %s", e)
            raise SerializationError(
                f"Settings contain values that cannot be written as literals: {e}"
            ) from e
        return f"{HEADER}\n{ASSIGNMENT_NAME} = {body}\n"

    def decode(self, text: str, source: str = "<string>") -> Dict[str, Any]:
        try:
            module = ast.parse(text, filename=source, mode="exec")
        except SyntaxError as e:
            logger.error("Syntax error in structured literal %s: %s", source, e)
            raise SerializationError(f"Invalid structured literal in {source}: {e}") from e

        node = _literal_node(module.body, source)
        if node is None:
            return _ensure_mapping(None, source)
        try:
            data = ast.literal_eval(node)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError) as e:
            logger.error("Non-literal content in %s: %s", source, e)
            raise SerializationError(
                f"Structured literal in {source} contains non-literal content: {e}"
            ) from e
        return _ensure_mapping(data, source)


def _is_docstring(stmt: ast.stmt) -> bool:
    return (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and isinstance(stmt.value.value, str)
    )


def _literal_node(body: List[ast.stmt], source: str) -> "ast.expr | None":
    statements = list(body)
    if len(statements) > 1 and _is_docstring(statements[0]):
        statements = statements[1:]
    if not statements:
        return None
    if len(statements) > 1:
        raise SerializationError(
            f"Structured literal in {source} must hold exactly one expression or assignment"
        )

    stmt = statements[0]
    if isinstance(stmt, ast.Expr):
        return stmt.value
    if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1 and isinstance(
        stmt.targets[0], ast.Name
    ):
        return stmt.value
    if isinstance(stmt, ast.AnnAssign) and stmt.value is not None and isinstance(
        stmt.target, ast.Name
    ):
        return stmt.value
    raise SerializationError(
        f"Unsupported statement {type(stmt).__name__} in structured literal {source}"
    )
