"""
Pydantic Model Introspection for ElmKit

Discovers Pydantic models referenced by FastAPI routes and turns each one into
an Elm record type alias with its JSON decoder and encoder.
"""

import re
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import BaseModel

from elmkit.core.schema import UnsupportedRouteError
from elmkit.core.constants import ELM_RESERVED_WORDS
from elmkit.core.nodes import Var, Str, Parens, Call, BinOp, Pipeline, ListExpr, Tuple as ElmTuple, FunctionDecl, TypeAlias, parenthesize
from elmkit.core.type_conversion import python_type_to_elm

_ELM_FIELD_PATTERN = re.compile(r"^[a-z][A-Za-z0-9_]*$")


def discover_models(py_types: Iterable[Any]) -> List[type]:
    """
    Discover all Pydantic models reachable from the given types.

    Uses depth-first traversal through model fields, so a model appears
    before the models it references. Each model is reported once.

    Args:
        py_types: Python type objects (parameter and return annotations)

    Returns:
        List of Pydantic model classes in discovery order
    """
    discovered = {}  # model_name -> model class (prevent duplicates)
    for py_type in py_types:
        _discover_from_type(py_type, discovered, ())
    return list(discovered.values())


def _discover_from_type(py_type: Any, discovered: Dict[str, type], in_progress: Tuple[str, ...]):
    for model in python_type_to_elm(py_type).models:
        name = model.__name__
        if name in in_progress:
            cycle = " -> ".join(in_progress[in_progress.index(name):] + (name,))
            raise UnsupportedRouteError(f"recursive model {cycle} cannot be expressed as an Elm type alias")
        if name in discovered:
            continue
        discovered[name] = model

        for field_info in model.model_fields.values():
            _discover_from_type(field_info.annotation, discovered, in_progress + (name,))


def model_declarations(model: type) -> Tuple[TypeAlias, FunctionDecl, FunctionDecl]:
    """
    Build the Elm declarations for a Pydantic model.

    Returns:
        Tuple of (type alias, decoder, encoder)
    """
    return generate_type_alias(model), generate_decoder(model), generate_encoder(model)


def generate_type_alias(model: type) -> TypeAlias:
    fields = []
    for elm_name, _, annotation in _model_fields(model):
        fields.append((elm_name, python_type_to_elm(annotation).name))
    return TypeAlias(model.__name__, fields)


def generate_decoder(model: type) -> FunctionDecl:
    """
    Decoder in applicative style:

        decodeBook =
          Json.Decode.succeed Book
            |: ("id" := Json.Decode.int)
    """
    name = model.__name__
    steps = []
    for _, json_key, annotation in _model_fields(model):
        field_decoder = python_type_to_elm(annotation).decoder
        steps.append(Parens(BinOp(Str(json_key), ":=", field_decoder)))

    return FunctionDecl(
        name=f"decode{name}",
        signature=f"Json.Decode.Decoder {name}",
        args=[],
        body=Pipeline(Call(Var("Json.Decode.succeed"), [Var(name)]), steps, operator="|:", multiline=True)
    )


def generate_encoder(model: type) -> FunctionDecl:
    name = model.__name__
    pairs = []
    for elm_name, json_key, annotation in _model_fields(model):
        field_encoder = parenthesize(python_type_to_elm(annotation).encoder)
        pairs.append(ElmTuple([Str(json_key), Call(field_encoder, [Var(f"x.{elm_name}")])]))

    return FunctionDecl(
        name=f"encode{name}",
        signature=f"{name} -> Json.Encode.Value",
        args=["x"],
        body=Call(Var("Json.Encode.object"), [ListExpr(pairs, multiline=True)], multiline=True)
    )


def elm_field_name(field_name: str) -> str:
    """
    Elm record field name for a Python field name.

    Reserved words get a trailing underscore (``type`` -> ``type_``); the JSON
    key is unaffected. Names Elm cannot use as record fields raise
    UnsupportedRouteError.
    """
    if not _ELM_FIELD_PATTERN.match(field_name):
        raise UnsupportedRouteError(f"field '{field_name}' is not a valid Elm record field name")
    if field_name in ELM_RESERVED_WORDS:
        return f"{field_name}_"
    return field_name


def _model_fields(model: type) -> List[Tuple[str, str, Any]]:
    """(Elm field name, JSON key, annotation) for each model field."""
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError(f"{model!r} is not a Pydantic model")

    fields = []
    seen = set()
    for field_name, field_info in model.model_fields.items():
        try:
            elm_name = elm_field_name(field_name)
        except UnsupportedRouteError as e:
            raise UnsupportedRouteError(f"model {model.__name__}: {e}") from e
        if elm_name in seen:
            raise UnsupportedRouteError(f"model {model.__name__}: field '{field_name}' collides with '{elm_name}'")
        seen.add(elm_name)
        fields.append((elm_name, field_info.alias or field_name, field_info.annotation))
    return fields
