"""
Elm pretty-printer.

Renders syntax nodes from ``elmkit.core.nodes`` to source text. Expressions
render to a list of lines relative to column zero; the parent decides where
those lines go. Layout follows the shape of hand-written Elm 0.17 code:
multi-line lists and records use leading commas, pipelines put each step on
its own line, and let-bindings indent their values two spaces.
"""

from typing import List

from elmkit.core.nodes import (
    Var, Str, Parens, Call, BinOp, Pipeline, Lambda, IfElse, Chain,
    ListExpr, Tuple, Record, Let, Expr, FunctionDecl, TypeAlias, Declaration,
)


class CodeBuilder:
    """Helper for building indented code with automatic indent management."""

    def __init__(self, indent_size: int = 2):
        self.lines = []
        self.indent_level = 0
        self.indent_size = indent_size

    def add_line(self, line: str = ""):
        """Add line with current indentation."""
        if line.strip():  # Only indent non-empty lines
            indented = " " * (self.indent_level * self.indent_size) + line
            self.lines.append(indented)
        else:
            self.lines.append("")

    def add_lines(self, lines: List[str]):
        for line in lines:
            self.add_line(line)

    def indent(self):
        self.indent_level += 1

    def dedent(self):
        self.indent_level = max(0, self.indent_level - 1)

    def add_block(self, opening: str, closing: str = None):
        """Context manager for indented blocks such as ``let ... in``."""
        return BlockContext(self, opening, closing)

    def get_code(self) -> str:
        return "\n".join(self.lines)


class BlockContext:
    """Context manager for automatic block indentation."""

    def __init__(self, builder: CodeBuilder, opening: str, closing: str = None):
        self.builder = builder
        self.closing = closing
        self.builder.add_line(opening)
        self.builder.indent()

    def __enter__(self):
        return self.builder

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.builder.dedent()
        if self.closing is not None:
            self.builder.add_line(self.closing)
        return None


# === EXPRESSIONS === #

def render_expression(expr: Expr) -> List[str]:
    """Render an expression to lines, first line unindented."""
    if isinstance(expr, Var):
        return [expr.name]
    elif isinstance(expr, Str):
        return [quote(expr.value)]
    elif isinstance(expr, Parens):
        return _render_parens(expr)
    elif isinstance(expr, Call):
        return _render_call(expr)
    elif isinstance(expr, BinOp):
        return _render_binop(expr)
    elif isinstance(expr, Pipeline):
        return _render_pipeline(expr)
    elif isinstance(expr, Lambda):
        return _hang("\\" + " ".join(expr.params) + " -> ", render_expression(expr.body))
    elif isinstance(expr, IfElse):
        return _render_if_else(expr)
    elif isinstance(expr, Chain):
        return _render_chain(expr)
    elif isinstance(expr, ListExpr):
        return _render_list(expr)
    elif isinstance(expr, Tuple):
        return ["(" + ", ".join(render_inline(item) for item in expr.items) + ")"]
    elif isinstance(expr, Record):
        return _render_record(expr)
    elif isinstance(expr, Let):
        return _render_let(expr)
    else:
        raise TypeError(f"Cannot render {type(expr).__name__} as an Elm expression")


def render_inline(expr: Expr) -> str:
    """Render an expression that must fit on one line."""
    lines = render_expression(expr)
    if len(lines) != 1:
        raise ValueError(f"Expression spans {len(lines)} lines where a single line is required")
    return lines[0]


def quote(value: str) -> str:
    """Elm string literal for ``value``."""
    escaped = (value.replace("\\", "\\\\")
                    .replace('"', '\\"')
                    .replace("\n", "\\n")
                    .replace("\t", "\\t"))
    return f'"{escaped}"'


def _hang(prefix: str, lines: List[str]) -> List[str]:
    """Prefix the first line and align continuation lines under it."""
    padding = " " * len(prefix)
    return [prefix + lines[0]] + [padding + line for line in lines[1:]]


def _indent(lines: List[str], width: int = 2) -> List[str]:
    return [" " * width + line if line else line for line in lines]


def _render_parens(expr: Parens) -> List[str]:
    lines = _hang("(", render_expression(expr.inner))
    lines[-1] += ")"
    return lines


def _render_call(expr: Call) -> List[str]:
    head = render_expression(expr.function)
    args = [render_expression(arg) for arg in expr.args]

    if not expr.multiline and len(head) == 1 and all(len(a) == 1 for a in args):
        return [" ".join([head[0]] + [a[0] for a in args])]

    lines = list(head)
    for arg_lines in args:
        lines.extend(_indent(arg_lines))
    return lines


def _render_binop(expr: BinOp) -> List[str]:
    left = render_expression(expr.left)
    right = render_expression(expr.right)

    if len(left) == 1 and len(right) == 1:
        return [f"{left[0]} {expr.op} {right[0]}"]
    return left + _hang(f"{expr.op} ", right)


def _render_pipeline(expr: Pipeline) -> List[str]:
    subject = render_expression(expr.subject)
    steps = [render_expression(step) for step in expr.steps]

    if not expr.multiline and len(subject) == 1 and all(len(s) == 1 for s in steps):
        return [f" {expr.operator} ".join([subject[0]] + [s[0] for s in steps])]

    lines = list(subject)
    for step_lines in steps:
        lines.extend(_hang(f"  {expr.operator} ", step_lines))
    return lines


def _render_if_else(expr: IfElse) -> List[str]:
    condition = render_inline(expr.condition)
    return (
        [f"if {condition} then"]
        + _indent(render_expression(expr.then))
        + ["else"]
        + _indent(render_expression(expr.otherwise))
    )


def _render_chain(expr: Chain) -> List[str]:
    if not expr.operands:
        raise ValueError("Cannot render an empty operator chain")

    lines = render_expression(expr.operands[0])
    for operand in expr.operands[1:]:
        lines.extend(_hang(f"{expr.operator} ", render_expression(operand)))
    return lines


def _render_list(expr: ListExpr) -> List[str]:
    if not expr.items:
        return ["[]"]

    rendered = [render_expression(item) for item in expr.items]
    if not expr.multiline and all(len(r) == 1 for r in rendered):
        return ["[" + ", ".join(r[0] for r in rendered) + "]"]

    lines = []
    for i, item_lines in enumerate(rendered):
        lines.extend(_hang("[ " if i == 0 else ", ", item_lines))
    lines.append("]")
    return lines


def _render_record(expr: Record) -> List[str]:
    if not expr.fields:
        return ["{}"]

    lines = []
    for i, (name, value) in enumerate(expr.fields):
        lines.append(("{ " if i == 0 else ", ") + f"{name} =")
        lines.extend(_indent(render_expression(value), 4))
    lines.append("}")
    return lines


def _render_let(expr: Let) -> List[str]:
    builder = CodeBuilder()
    with builder.add_block("let", "in"):
        for name, value in expr.bindings:
            builder.add_line(f"{name} =")
            builder.indent()
            builder.add_lines(render_expression(value))
            builder.dedent()
    builder.indent()
    builder.add_lines(render_expression(expr.body))
    return builder.lines


# === DECLARATIONS === #

def render_declaration(declaration: Declaration) -> str:
    """Render a top-level declaration. Raw strings pass through unchanged."""
    if isinstance(declaration, str):
        return declaration
    elif isinstance(declaration, FunctionDecl):
        return _render_function(declaration)
    elif isinstance(declaration, TypeAlias):
        return _render_type_alias(declaration)
    else:
        raise TypeError(f"Cannot render {type(declaration).__name__} as an Elm declaration")


def _render_function(decl: FunctionDecl) -> str:
    builder = CodeBuilder()
    builder.add_line(f"{decl.name} : {decl.signature}")
    with builder.add_block(" ".join([decl.name] + list(decl.args)) + " ="):
        builder.add_lines(render_expression(decl.body))
    return builder.get_code()


def _render_type_alias(decl: TypeAlias) -> str:
    builder = CodeBuilder()
    with builder.add_block(f"type alias {decl.name} ="):
        if not decl.fields:
            builder.add_line("{}")
        for i, (name, elm_type) in enumerate(decl.fields):
            builder.add_line(("{ " if i == 0 else ", ") + f"{name} : {elm_type}")
        if decl.fields:
            builder.add_line("}")
    return builder.get_code()
