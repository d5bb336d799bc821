"""
ElmKit Type Conversion

Converts Python runtime type objects into Elm type text together with the JSON
decoder and encoder expressions for that type. Handles typing constructs,
primitives, enums and Pydantic models with recursive support for nested
types such as Optional[List[Book]].
"""

import typing
import inspect
from enum import Enum
from types import UnionType
from functools import lru_cache
from dataclasses import dataclass
from collections.abc import Sequence
from typing import Any, Tuple, Union, get_origin, get_args

from pydantic import BaseModel

from elmkit.core.constants import COMMON_TYPE_MAP
from elmkit.core.nodes import Var, Parens, Call, BinOp, Expr, parenthesize

_LIST_ORIGINS = (list, set, frozenset)


@dataclass(frozen=True)
class ElmType:
    """
    Elm view of a Python type.

    Examples:
        int -> ElmType("Int", Json.Decode.int, Json.Encode.int)
        Optional[List[Book]] -> ElmType("Maybe (List Book)", ..., models=(Book,))
    """
    name: str                                  # Elm type text
    decoder: Expr                              # Json.Decode expression
    encoder: Expr                              # Function from the type to Json.Encode.Value
    models: Tuple[type, ...] = ()              # Pydantic models referenced

    @property
    def wrapped_name(self) -> str:
        """Type text safe to use as a type argument."""
        return f"({self.name})" if " " in self.name else self.name


def _primitive(name: str, kind: str) -> ElmType:
    return ElmType(name, Var(f"Json.Decode.{kind}"), Var(f"Json.Encode.{kind}"))


INT = _primitive("Int", "int")
FLOAT = _primitive("Float", "float")
STRING = _primitive("String", "string")
BOOL = _primitive("Bool", "bool")
VALUE = ElmType("Json.Decode.Value", Var("Json.Decode.value"), Var("identity"))
UNIT = ElmType(
    "()",
    Call(Var("Json.Decode.succeed"), [Var("()")]),
    Call(Var("always"), [Var("Json.Encode.null")])
)

_NAMED_PRIMITIVES = {"String": STRING, "Float": FLOAT, "Int": INT, "Bool": BOOL}


@lru_cache(maxsize=256)
def python_type_to_elm(py_type: Any) -> ElmType:
    """
    Convert Python runtime type object to ElmType.

    Args:
        py_type: Python type object from typing.get_type_hints() or a model field

    Returns:
        ElmType; types with no Elm counterpart map to raw JSON values
    """
    if py_type is None or py_type is type(None):
        return UNIT

    origin = get_origin(py_type)
    if origin is not None:
        return _convert_typing_construct(py_type, origin)

    if py_type is bool:
        return BOOL
    if py_type is int:
        return INT
    if py_type is float:
        return FLOAT
    if py_type is str:
        return STRING
    if py_type is list:
        return list_of(VALUE)

    if inspect.isclass(py_type):
        return _convert_custom_type(py_type)

    return VALUE


def _convert_typing_construct(py_type: Any, origin: Any) -> ElmType:
    """Convert typing module constructs (Optional, List, Literal, etc.)."""
    args = get_args(py_type)

    if origin is typing.Annotated:
        return python_type_to_elm(args[0])

    elif origin is Union or origin is UnionType:
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return maybe_of(python_type_to_elm(non_none[0]))
        # General unions have no Elm counterpart without a custom decoder
        return VALUE

    elif _is_list_origin(origin):
        inner = python_type_to_elm(args[0]) if args else VALUE
        return list_of(inner)

    elif origin is typing.Literal:
        if all(isinstance(arg, str) for arg in args):
            return STRING
        if all(isinstance(arg, int) and not isinstance(arg, bool) for arg in args):
            return INT
        return VALUE

    return VALUE


def _is_list_origin(origin: Any) -> bool:
    """list, set and Sequence generics all become Elm lists; tuples do not."""
    if origin in _LIST_ORIGINS:
        return True
    return inspect.isclass(origin) and issubclass(origin, Sequence) and origin not in (str, bytes, tuple)


def _convert_custom_type(cls: type) -> ElmType:
    """Convert Pydantic models, enums and well-known library types."""
    if issubclass(cls, BaseModel):
        return ElmType(
            name=cls.__name__,
            decoder=Var(f"decode{cls.__name__}"),
            encoder=Var(f"encode{cls.__name__}"),
            models=(cls,)
        )

    if issubclass(cls, Enum):
        values = [member.value for member in cls]
        if values and all(isinstance(v, str) for v in values):
            return STRING
        if values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            return INT
        return VALUE

    if issubclass(cls, bool):
        return BOOL
    if issubclass(cls, int):
        return INT
    if issubclass(cls, float):
        return FLOAT
    if issubclass(cls, str):
        return STRING

    mapped = COMMON_TYPE_MAP.get(cls.__name__)
    if mapped:
        return _NAMED_PRIMITIVES[mapped]

    return VALUE


def maybe_of(inner: ElmType) -> ElmType:
    """``Maybe T`` with ``null`` as the absent value."""
    return ElmType(
        name=f"Maybe {inner.wrapped_name}",
        decoder=Call(Var("Json.Decode.maybe"), [parenthesize(inner.decoder)]),
        encoder=Parens(BinOp(
            Call(Var("Maybe.withDefault"), [Var("Json.Encode.null")]),
            "<<",
            Call(Var("Maybe.map"), [parenthesize(inner.encoder)])
        )),
        models=inner.models
    )


def list_of(inner: ElmType) -> ElmType:
    """``List T`` encoded as a JSON array."""
    return ElmType(
        name=f"List {inner.wrapped_name}",
        decoder=Call(Var("Json.Decode.list"), [parenthesize(inner.decoder)]),
        encoder=Parens(BinOp(
            Var("Json.Encode.list"),
            "<<",
            Call(Var("List.map"), [parenthesize(inner.encoder)])
        )),
        models=inner.models
    )


def unwrap_optional(py_type: Any) -> Any:
    """Strip an Optional wrapper, returning the inner type."""
    origin = get_origin(py_type)
    if origin is typing.Annotated:
        return unwrap_optional(get_args(py_type)[0])
    if origin is Union or origin is UnionType:
        non_none = [arg for arg in get_args(py_type) if arg is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
    return py_type


def is_list_type(py_type: Any) -> bool:
    """Check if a (possibly Optional) type is a list-like collection."""
    inner = unwrap_optional(py_type)
    return inner in _LIST_ORIGINS or _is_list_origin(get_origin(inner))
