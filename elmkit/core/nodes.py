"""
Elm Syntax Nodes

Typed syntax tree for the subset of Elm that generated clients use. Generators
build these nodes and hand them to the printer in
``elmkit.generators.elm.printer``, which is the only place that decides layout
and string escaping.
"""

from dataclasses import dataclass, field
from typing import List, Tuple as TupleType, Union


# === EXPRESSIONS === #

@dataclass(frozen=True)
class Var:
    """Identifier, qualified name or operator section (``Http.empty``, ``(++)``)."""
    name: str


@dataclass(frozen=True)
class Str:
    """String literal. Escaped by the printer."""
    value: str


@dataclass(frozen=True)
class Parens:
    """Parenthesized expression."""
    inner: 'Expr'


@dataclass(frozen=True)
class Call:
    """
    Function application.

    Rendered on one line unless ``multiline`` is set or an argument spans
    several lines, in which case each argument goes on its own line indented
    under the function.
    """
    function: 'Expr'
    args: List['Expr'] = field(default_factory=list)
    multiline: bool = False


@dataclass(frozen=True)
class BinOp:
    """Infix operator application (``a ++ b``, ``f >> g``)."""
    left: 'Expr'
    op: str
    right: 'Expr'


@dataclass(frozen=True)
class Pipeline:
    """
    ``subject |> step |> step``. With ``multiline`` every step starts a new
    line. The operator is configurable so decoder pipelines (``|:``) reuse it.
    """
    subject: 'Expr'
    steps: List['Expr'] = field(default_factory=list)
    operator: str = "|>"
    multiline: bool = False


@dataclass(frozen=True)
class Lambda:
    params: List[str]
    body: 'Expr'


@dataclass(frozen=True)
class IfElse:
    condition: 'Expr'
    then: 'Expr'
    otherwise: 'Expr'


@dataclass(frozen=True)
class Chain:
    """Operands joined by ``operator``, one operand per line."""
    operands: List['Expr']
    operator: str = "++"


@dataclass(frozen=True)
class ListExpr:
    items: List['Expr'] = field(default_factory=list)
    multiline: bool = False


@dataclass(frozen=True)
class Tuple:
    items: List['Expr']


@dataclass(frozen=True)
class Record:
    """Record literal with each field value on its own line."""
    fields: List[TupleType[str, 'Expr']]


@dataclass(frozen=True)
class Let:
    bindings: List[TupleType[str, 'Expr']]
    body: 'Expr'


Expr = Union[Var, Str, Parens, Call, BinOp, Pipeline, Lambda, IfElse, Chain, ListExpr, Tuple, Record, Let]


# === DECLARATIONS === #

@dataclass(frozen=True)
class FunctionDecl:
    """
    Top-level value or function with its type annotation.

    Examples:
        FunctionDecl("decodeBook", "Json.Decode.Decoder Book", [], ...)
        FunctionDecl("getBooksBy", "Int -> Task.Task Http.Error (Book)", ["id"], ...)
    """
    name: str
    signature: str
    args: List[str]
    body: Expr


@dataclass(frozen=True)
class TypeAlias:
    """Record type alias; ``fields`` are (field name, Elm type text) pairs."""
    name: str
    fields: List[TupleType[str, str]] = field(default_factory=list)


# Raw strings are accepted so externally produced declarations pass through
Declaration = Union[FunctionDecl, TypeAlias, str]


def parenthesize(expr: Expr) -> Expr:
    """Wrap compound expressions so they can be used as a function argument."""
    if isinstance(expr, (Call, BinOp, Pipeline, Lambda, IfElse)):
        return Parens(expr)
    return expr
