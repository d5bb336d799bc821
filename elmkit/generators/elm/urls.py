"""
URL expression building for generated Elm clients.

Path captures are converted with ``toString`` and percent-encoded; query
arguments render to strings that are empty when the argument is absent, so
the function body can filter them before joining.
"""

from typing import List

from elmkit.core.constants import ElmRuntime, PARAMS_BINDING
from elmkit.core.schema import Segment, QueryArg, ArgType
from elmkit.core.nodes import (
    Var, Str, Parens, Call, BinOp, Pipeline, Lambda, IfElse, Chain, ListExpr, Expr,
)


def build_url(prefix: str, segments: List[Segment], with_query: bool = False) -> Expr:
    """
    Build the URL expression for an endpoint.

    Operands are the quoted prefix (omitted when empty), then one
    ``"/" ++ segment`` operand per path segment, then the ``?`` query suffix
    when ``with_query`` is set.

    Example:
        build_url("", [Segment.static("books"), Segment.capture("id")]) renders as

            "/" ++ "books"
            ++ "/" ++ (id |> toString |> Http.uriEncode)
    """
    operands = []
    if prefix:
        operands.append(Str(prefix))

    for segment in segments:
        operands.append(BinOp(Str("/"), "++", render_segment(segment)))

    if not operands:
        operands.append(Str("/"))

    if with_query:
        operands.append(build_query_suffix())

    return Chain(operands)


def render_segment(segment: Segment) -> Expr:
    if segment.is_capture:
        return _encoded(Var(segment.name))
    return Str(segment.name)


def build_query_suffix() -> Expr:
    """``"?"`` followed by the joined params, or nothing when all are empty."""
    params = Var(PARAMS_BINDING)
    return IfElse(
        condition=Call(Var("List.isEmpty"), [params]),
        then=Str(""),
        otherwise=BinOp(Str("?"), "++", Call(Var("String.join"), [Str("&"), params]))
    )


def build_params_binding(query_args: List[QueryArg]) -> Expr:
    """``List.filter (not << String.isEmpty) [ ... ]`` over the rendered args."""
    not_empty = Parens(BinOp(Var("not"), "<<", Var("String.isEmpty")))
    return Call(
        Call(Var("List.filter"), [not_empty]),
        [ListExpr([render_query_arg(arg) for arg in query_args], multiline=True)],
        multiline=True
    )


def render_query_arg(query_arg: QueryArg) -> Expr:
    """Render one query argument as an Elm expression of type String."""
    name = query_arg.name

    if query_arg.arg_type == ArgType.NORMAL:
        add_key = Call(Var("(++)"), [Str(f"{name}=")])
        convert = BinOp(BinOp(Var(ElmRuntime.TO_STRING_FN), ">>", Var(ElmRuntime.URI_ENCODE_FN)), ">>", add_key)
        return Pipeline(
            Var(name),
            [
                Call(Var("Maybe.map"), [Parens(convert)]),
                Call(Var("Maybe.withDefault"), [Str("")]),
            ],
            multiline=True
        )

    elif query_arg.arg_type == ArgType.FLAG:
        return IfElse(condition=Var(name), then=Str(f"{name}="), otherwise=Str(""))

    elif query_arg.arg_type == ArgType.LIST:
        encode_value = Lambda(["val"], BinOp(Str(f"{name}[]="), "++", _encoded(Var("val"))))
        return Pipeline(
            Var(name),
            [
                Call(Var("List.map"), [Parens(encode_value)]),
                Call(Var("String.join"), [Str("&")]),
            ],
            multiline=True
        )

    else:
        raise ValueError(f"Unknown query argument type: {query_arg.arg_type}")


def _encoded(value: Expr) -> Expr:
    return Parens(Pipeline(value, [Var(ElmRuntime.TO_STRING_FN), Var(ElmRuntime.URI_ENCODE_FN)]))
