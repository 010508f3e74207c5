"""Evaluation of rotation-angle expressions found in source text."""

from __future__ import annotations

import ast
import math
import operator

_CONSTANTS = {
    "pi": math.pi,
    "PI": math.pi,
    "tau": math.tau,
    "e": math.e,
}

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def evaluate_angle(text: str) -> float | None:
    """Evaluate an angle such as ``1.57``, ``pi/2``, ``-np.pi/4`` or ``PI() / 2.0``.

    Only numbers, the constant pi (bare, ``np.``/``math.`` qualified, or
    Q#'s ``PI()``) and arithmetic are understood.  Anything else yields
    ``None`` so the caller can fall back to the default angle.
    """
    text = text.strip()
    if not text:
        return None
    if "=" in text:
        # Keyword form, e.g. cirq.rx(rads=0.5)
        text = text.split("=", 1)[1].strip()
    try:
        tree = ast.parse(text, mode="eval")
        value = _evaluate(tree.body)
    except (SyntaxError, ValueError, ZeroDivisionError, OverflowError):
        return None
    if not isinstance(value, float) or not math.isfinite(value):
        return None
    return value


def _evaluate(node: ast.AST) -> float:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) \
            and not isinstance(node.value, bool):
        return float(node.value)
    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]
    if isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name) \
            and node.value.id in ("np", "numpy", "math") and node.attr in _CONSTANTS:
        return _CONSTANTS[node.attr]
    if isinstance(node, ast.Call) and not node.args and not node.keywords \
            and isinstance(node.func, ast.Name) and node.func.id == "PI":
        return math.pi
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"Unsupported angle expression: {ast.dump(node)}")
