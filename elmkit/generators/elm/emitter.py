"""
Elm client code emitter.

Turns ElmRequest descriptors into top-level Elm declarations: the endpoint's
auxiliary type aliases, decoders and encoders followed by one request
function. Output for a whole API is flattened in declaration order and
deduplicated by exact text.
"""

from typing import Iterable, List

from elmkit.core.constants import ElmRuntime, BODY_ARG_NAME, PARAMS_BINDING, REQUEST_BINDING
from elmkit.core.config import ElmOptions, DEFAULT_ELM_OPTIONS
from elmkit.core.nodes import Var, Str, Parens, Call, ListExpr, Tuple, Record, Let, FunctionDecl, Expr
from elmkit.core.schema import ElmRequest
from .names import synthesize_name
from .printer import render_declaration
from .signatures import build_signature
from .urls import build_url, build_params_binding


def generate_elm_for_api(requests: Iterable[ElmRequest]) -> List[str]:
    """Generate Elm code for an API with default options."""
    return generate_elm_for_api_with(DEFAULT_ELM_OPTIONS, requests)


def generate_elm_for_api_with(options: ElmOptions, requests: Iterable[ElmRequest]) -> List[str]:
    """
    Generate Elm code for an API with custom options.

    Returns every declaration needed to query the API: type aliases, JSON
    decoders, JSON encoders and request functions, in endpoint order. A
    declaration shared by several endpoints appears once, where it first
    occurs.
    """
    declarations = []
    for request in requests:
        declarations.extend(generate_elm_for_request(options, request))
    return deduplicate(declarations)


def generate_elm_for_request(options: ElmOptions, request: ElmRequest) -> List[str]:
    """Render one endpoint: type defs, decoder defs, encoder defs, then the function."""
    auxiliary = request.type_defs + request.decoder_defs + request.encoder_defs
    rendered = [render_declaration(decl) for decl in auxiliary]
    rendered.append(render_declaration(build_function(options, request)))
    return rendered


def build_function(options: ElmOptions, request: ElmRequest) -> FunctionDecl:
    """Build the request function declaration for an endpoint."""
    bindings = []
    if request.query_args:
        bindings.append((PARAMS_BINDING, build_params_binding(request.query_args)))
    bindings.append((REQUEST_BINDING, _build_request_record(options, request)))

    body = Call(
        Var(ElmRuntime.FROM_JSON_FN),
        [
            Var(request.decoder),
            Parens(Call(Var(ElmRuntime.SEND_FN), [Var(ElmRuntime.DEFAULT_SETTINGS), Var(REQUEST_BINDING)])),
        ],
        multiline=True
    )

    return FunctionDecl(
        name=synthesize_name(request.method, request.path_segments),
        signature=build_signature(request.arg_types + [request.result_type]),
        args=list(request.arg_names),
        body=Let(bindings, body)
    )


def _build_request_record(options: ElmOptions, request: ElmRequest) -> Expr:
    header_name, header_value = ElmRuntime.CONTENT_TYPE_HEADER
    url = build_url(options.urlPrefix, request.path_segments, with_query=bool(request.query_args))

    return Record([
        ("verb", Str(request.method)),
        ("headers", ListExpr([Tuple([Str(header_name), Str(header_value)])])),
        ("url", url),
        ("body", _build_body(request)),
    ])


def _build_body(request: ElmRequest) -> Expr:
    if not request.has_body:
        return Var(ElmRuntime.EMPTY_BODY)

    encoded = Call(Var(request.body_encoder), [Var(BODY_ARG_NAME)])
    json_text = Call(Var(ElmRuntime.ENCODE_FN), [Var("0"), Parens(encoded)])
    return Call(Var(ElmRuntime.STRING_BODY_FN), [Parens(json_text)])


def deduplicate(declarations: Iterable[str]) -> List[str]:
    """Drop exact textual duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(declarations))
