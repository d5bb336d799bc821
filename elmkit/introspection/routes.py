"""
FastAPI Route Introspection for ElmKit

Converts FastAPI routes into ElmRequest descriptors using runtime
introspection of the route's dependant (path, query and body parameters) and
its return annotation or response model.
"""

import typing
import logging
from typing import Any, Dict, List, Optional

from fastapi.routing import APIRoute

from elmkit.core.nodes import parenthesize
from elmkit.core.constants import BODY_ARG_NAME
from elmkit.core.schema import ElmRequest, Segment, QueryArg, ArgType, UnsupportedRouteError
from elmkit.core.type_conversion import python_type_to_elm, unwrap_optional, is_list_type, maybe_of
from elmkit.generators.elm.printer import render_inline
from elmkit.introspection.models import discover_models, generate_type_alias, generate_decoder, generate_encoder


logger = logging.getLogger(__name__)


def route_to_requests(route: APIRoute) -> List[ElmRequest]:
    """
    Convert a FastAPI route to one ElmRequest per HTTP method.

    Args:
        route: FastAPI APIRoute from app.routes

    Returns:
        ElmRequest objects ordered by method name

    Raises:
        UnsupportedRouteError: For form, file or multi-part body parameters, and
            for models with no Elm record counterpart (recursive models,
            field names Elm cannot use)
    """
    endpoint = route.endpoint
    type_hints = _get_type_hints(endpoint)
    dependant = route.dependant
    endpoint_label = f"{','.join(sorted(route.methods))} {route.path}"

    segments = parse_path(route.path)

    # Path captures, in path order
    path_types = {}
    for model_field in dependant.path_params:
        path_types[model_field.name] = _parameter_type(model_field, type_hints)

    arg_names = []
    arg_types = []
    for segment in segments:
        if segment.is_capture:
            if segment.name not in path_types:
                raise UnsupportedRouteError(f"{endpoint_label}: no parameter for path capture '{segment.name}'")
            arg_names.append(segment.name)
            arg_types.append(python_type_to_elm(path_types[segment.name]).name)

    # Query parameters
    query_args = []
    for model_field in dependant.query_params:
        query_arg, elm_type = _query_arg_from_field(model_field, type_hints)
        query_args.append(query_arg)
        arg_names.append(query_arg.name)
        arg_types.append(elm_type)

    # Request body
    body_type = _extract_body_type(dependant, type_hints, endpoint_label)
    body_encoder = None
    if body_type is not None:
        body_elm = python_type_to_elm(body_type)
        body_encoder = render_inline(parenthesize(body_elm.encoder))
        arg_names.append(BODY_ARG_NAME)
        arg_types.append(body_elm.name)

    result_type = _extract_return_type(route, type_hints)
    result_elm = python_type_to_elm(result_type)

    # Auxiliary declarations
    referenced = [path_types[name] for name in path_types] + [result_type]
    referenced += [_parameter_type(f, type_hints) for f in dependant.query_params]
    if body_type is not None:
        referenced.append(body_type)

    try:
        type_defs = [generate_type_alias(model) for model in discover_models(referenced)]
        decoder_defs = [generate_decoder(model) for model in discover_models([result_type])]
        encoder_defs = [generate_encoder(model) for model in discover_models([body_type] if body_type is not None else [])]
    except UnsupportedRouteError as e:
        raise UnsupportedRouteError(f"{endpoint_label}: {e}") from e

    requests = []
    for method in sorted(route.methods):
        requests.append(ElmRequest(
            method=method,
            path_segments=segments,
            query_args=query_args,
            arg_names=list(arg_names),
            arg_types=list(arg_types),
            result_type=result_elm.name,
            decoder=render_inline(parenthesize(result_elm.decoder)),
            body_encoder=body_encoder,
            type_defs=type_defs,
            decoder_defs=decoder_defs,
            encoder_defs=encoder_defs,
        ))
    return requests


def parse_path(path: str) -> List[Segment]:
    """
    Split a FastAPI path into segments.

    "/books/{book_id}/authors" -> [Static("books"), Capture("book_id"), Static("authors")]
    Path convertors such as "{file_path:path}" are dropped.
    """
    segments = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            name = part[1:-1].split(":", 1)[0]
            segments.append(Segment.capture(name))
        else:
            segments.append(Segment.static(part))
    return segments


def _get_type_hints(endpoint) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(endpoint)
    except (NameError, TypeError) as e:
        logger.debug(f"Could not resolve type hints for {getattr(endpoint, '__name__', endpoint)}: {e}")
        return {}


def _parameter_type(model_field, type_hints: Dict[str, Any]) -> Any:
    """Python type of a FastAPI parameter, preferring the function annotation."""
    if model_field.name in type_hints:
        return type_hints[model_field.name]
    return model_field.field_info.annotation


def _query_arg_from_field(model_field, type_hints: Dict[str, Any]) -> tuple:
    """
    Classify a query parameter.

    Returns:
        Tuple of (QueryArg, Elm argument type text)
    """
    name = model_field.alias or model_field.name
    py_type = unwrap_optional(_parameter_type(model_field, type_hints))

    if py_type is bool:
        return QueryArg(name, ArgType.FLAG), "Bool"

    if is_list_type(py_type):
        return QueryArg(name, ArgType.LIST), python_type_to_elm(py_type).name

    return QueryArg(name, ArgType.NORMAL), maybe_of(python_type_to_elm(py_type)).name


def _extract_body_type(dependant, type_hints: Dict[str, Any], endpoint_label: str) -> Optional[Any]:
    """Return the Python type of the single JSON body parameter, if any."""
    body_params = dependant.body_params
    if not body_params:
        return None

    if len(body_params) > 1:
        names = ", ".join(f.name for f in body_params)
        raise UnsupportedRouteError(f"{endpoint_label}: multiple body parameters ({names}) are not supported")

    model_field = body_params[0]
    field_info_type = model_field.field_info.__class__.__name__
    if field_info_type in ("Form", "File"):
        raise UnsupportedRouteError(f"{endpoint_label}: {field_info_type.lower()} parameters are not supported")
    if getattr(model_field.field_info, "embed", False):
        raise UnsupportedRouteError(f"{endpoint_label}: embedded body parameter '{model_field.name}' is not supported")

    return _parameter_type(model_field, type_hints)


def _extract_return_type(route: APIRoute, type_hints: Dict[str, Any]) -> Any:
    """
    Extract return type using multiple strategies.

    Checks the return annotation first, then FastAPI's response_model. Routes
    with neither decode to unit.
    """
    if 'return' in type_hints:
        return type_hints['return']

    if getattr(route, 'response_model', None):
        return route.response_model

    return None
