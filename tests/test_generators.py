"""
Code generation tests for Elm names, signatures, URLs and request functions
"""

from elmkit.core.config import ElmOptions
from elmkit.core.nodes import FunctionDecl, TypeAlias, Var
from elmkit.core.schema import ElmRequest, Segment, QueryArg, ArgType
from elmkit.generators.elm import (
    ElmSpec,
    build_url,
    camel_case,
    specs_to_dir,
    build_signature,
    synthesize_name,
    render_query_arg,
    render_expression,
    render_elm_module,
    generate_elm_for_api,
    generate_elm_for_api_with,
    generate_elm_for_request,
)


BOOK_DECODER = "\n".join([
    "decodeBook : Json.Decode.Decoder Book",
    "decodeBook =",
    "  Json.Decode.succeed Book",
    '    |: ("id" := Json.Decode.int)',
])


def get_book_request(**overrides) -> ElmRequest:
    fields = dict(
        method="GET",
        path_segments=[Segment.static("books"), Segment.capture("id")],
        arg_names=["id"],
        arg_types=["Int"],
        result_type="Book",
        decoder="decodeBook",
        decoder_defs=[BOOK_DECODER],
    )
    fields.update(overrides)
    return ElmRequest(**fields)


# === NAMES === #

def test_name_from_verb_and_path():
    segments = [Segment.static("books"), Segment.capture("id")]
    assert synthesize_name("GET", segments) == "getBooksBy"


def test_name_keeps_root_to_leaf_order():
    segments = [Segment.static("books"), Segment.capture("id"), Segment.static("authors")]
    assert synthesize_name("POST", segments) == "postBooksByAuthors"


def test_name_without_segments_is_verb():
    assert synthesize_name("DELETE", []) == "delete"


def test_name_strips_non_identifier_characters():
    segments = [Segment.static("user-profiles"), Segment.static("api_keys")]
    assert synthesize_name("GET", segments) == "getUserProfilesApiKeys"


def test_name_is_deterministic():
    segments = [Segment.static("books"), Segment.capture("id")]
    assert synthesize_name("PUT", segments) == synthesize_name("PUT", segments)


def test_camel_case_capitalizes_later_tokens_only():
    assert camel_case(["get", "books", "by"]) == "getBooksBy"
    assert camel_case([]) == ""


# === SIGNATURES === #

def test_signature_wraps_result_in_task():
    assert build_signature(["Book"]) == "Task.Task Http.Error (Book)"


def test_signature_is_curried_in_declaration_order():
    signature = build_signature(["Int", "String", "List Book"])
    assert signature == "Int -> String -> Task.Task Http.Error (List Book)"


def test_signature_arrow_count():
    for arg_types in (["A"], ["A", "B"], ["A", "B", "C", "D"]):
        assert build_signature(arg_types).count("->") == len(arg_types) - 1


def test_signature_of_empty_input_is_empty():
    assert build_signature([]) == ""


# === URLS === #

def test_url_segments_preserve_order():
    url = build_url("", [Segment.static("books"), Segment.capture("id")])
    assert render_expression(url) == [
        '"/" ++ "books"',
        '++ "/" ++ (id |> toString |> Http.uriEncode)',
    ]


def test_url_with_prefix():
    url = build_url("https://api.example.com", [Segment.static("books")])
    assert render_expression(url) == [
        '"https://api.example.com"',
        '++ "/" ++ "books"',
    ]


def test_url_prefix_only():
    url = build_url("https://api.example.com", [])
    assert render_expression(url) == ['"https://api.example.com"']


def test_url_root_without_prefix():
    assert render_expression(build_url("", [])) == ['"/"']


def test_url_with_query_suffix():
    url = build_url("", [Segment.static("books")], with_query=True)
    assert render_expression(url) == [
        '"/" ++ "books"',
        '++ if List.isEmpty params then',
        '     ""',
        '   else',
        '     "?" ++ String.join "&" params',
    ]


def test_normal_query_arg():
    lines = render_expression(render_query_arg(QueryArg("q", ArgType.NORMAL)))
    assert lines == [
        "q",
        '  |> Maybe.map (toString >> Http.uriEncode >> (++) "q=")',
        '  |> Maybe.withDefault ""',
    ]


def test_flag_query_arg():
    lines = render_expression(render_query_arg(QueryArg("active", ArgType.FLAG)))
    assert lines == [
        "if active then",
        '  "active="',
        "else",
        '  ""',
    ]


def test_list_query_arg():
    lines = render_expression(render_query_arg(QueryArg("tag", ArgType.LIST)))
    assert lines == [
        "tag",
        '  |> List.map (\\val -> "tag[]=" ++ (val |> toString |> Http.uriEncode))',
        '  |> String.join "&"',
    ]


# === REQUEST FUNCTIONS === #

def test_get_endpoint_end_to_end():
    declarations = generate_elm_for_request(ElmOptions(), get_book_request())

    assert declarations[0] == BOOK_DECODER
    assert declarations[1] == "\n".join([
        "getBooksBy : Int -> Task.Task Http.Error (Book)",
        "getBooksBy id =",
        "  let",
        "    request =",
        "      { verb =",
        '          "GET"',
        "      , headers =",
        '          [("Content-Type", "application/json")]',
        "      , url =",
        '          "/" ++ "books"',
        '          ++ "/" ++ (id |> toString |> Http.uriEncode)',
        "      , body =",
        "          Http.empty",
        "      }",
        "  in",
        "    Http.fromJson",
        "      decodeBook",
        "      (Http.send Http.defaultSettings request)",
    ])


def test_no_query_args_means_no_params_logic():
    function = generate_elm_for_request(ElmOptions(), get_book_request())[-1]
    assert "params" not in function
    assert '"?"' not in function


def test_query_args_emit_params_binding_and_one_conditional():
    request = ElmRequest(
        method="GET",
        path_segments=[Segment.static("books")],
        query_args=[
            QueryArg("q", ArgType.NORMAL),
            QueryArg("available", ArgType.FLAG),
            QueryArg("tag", ArgType.LIST),
        ],
        arg_names=["q", "available", "tag"],
        arg_types=["Maybe String", "Bool", "List String"],
        result_type="List Book",
        decoder="(Json.Decode.list decodeBook)",
    )

    function = generate_elm_for_request(ElmOptions(), request)[-1]

    assert function == "\n".join([
        "getBooks : Maybe String -> Bool -> List String -> Task.Task Http.Error (List Book)",
        "getBooks q available tag =",
        "  let",
        "    params =",
        "      List.filter (not << String.isEmpty)",
        "        [ q",
        '            |> Maybe.map (toString >> Http.uriEncode >> (++) "q=")',
        '            |> Maybe.withDefault ""',
        "        , if available then",
        '            "available="',
        "          else",
        '            ""',
        "        , tag",
        '            |> List.map (\\val -> "tag[]=" ++ (val |> toString |> Http.uriEncode))',
        '            |> String.join "&"',
        "        ]",
        "    request =",
        "      { verb =",
        '          "GET"',
        "      , headers =",
        '          [("Content-Type", "application/json")]',
        "      , url =",
        '          "/" ++ "books"',
        "          ++ if List.isEmpty params then",
        '               ""',
        "             else",
        '               "?" ++ String.join "&" params',
        "      , body =",
        "          Http.empty",
        "      }",
        "  in",
        "    Http.fromJson",
        "      (Json.Decode.list decodeBook)",
        "      (Http.send Http.defaultSettings request)",
    ])
    assert function.count('"?"') == 1


def test_body_is_encoded_with_endpoint_encoder():
    request = ElmRequest(
        method="POST",
        path_segments=[Segment.static("books")],
        arg_names=["body"],
        arg_types=["Book"],
        result_type="Book",
        decoder="decodeBook",
        body_encoder="encodeBook",
    )

    function = generate_elm_for_request(ElmOptions(), request)[-1]

    assert function.startswith("postBooks : Book -> Task.Task Http.Error (Book)\npostBooks body =\n")
    assert "          Http.string (Json.Encode.encode 0 (encodeBook body))" in function.split("\n")
    assert '          [("Content-Type", "application/json")]' in function.split("\n")


def test_zero_argument_endpoint_is_a_task_value():
    request = ElmRequest(
        method="GET",
        path_segments=[Segment.static("books")],
        result_type="List Book",
        decoder="(Json.Decode.list decodeBook)",
    )

    lines = generate_elm_for_request(ElmOptions(), request)[-1].split("\n")

    assert lines[0] == "getBooks : Task.Task Http.Error (List Book)"
    assert lines[1] == "getBooks ="


def test_url_prefix_is_applied():
    options = ElmOptions(urlPrefix="https://api.example.com")
    function = generate_elm_for_request(options, get_book_request())[-1]
    assert '          "https://api.example.com"\n          ++ "/" ++ "books"' in function


def test_auxiliary_declarations_come_first_in_order():
    request = get_book_request(
        type_defs=[TypeAlias("Book", [("id", "Int")])],
        decoder_defs=[BOOK_DECODER],
        encoder_defs=["encodeBook : Book -> Json.Encode.Value\nencodeBook x =\n  Json.Encode.int x.id"],
    )

    declarations = generate_elm_for_request(ElmOptions(), request)

    assert len(declarations) == 4
    assert declarations[0] == "type alias Book =\n  { id : Int\n  }"
    assert declarations[1] == BOOK_DECODER
    assert declarations[2].startswith("encodeBook :")
    assert declarations[3].startswith("getBooksBy :")


def test_shared_declarations_are_emitted_once():
    delete_request = get_book_request(method="DELETE")
    declarations = generate_elm_for_api([get_book_request(), delete_request])

    assert declarations.count(BOOK_DECODER) == 1
    assert declarations[0] == BOOK_DECODER
    assert declarations[1].startswith("getBooksBy :")
    assert declarations[2].startswith("deleteBooksBy :")


def test_textually_different_declarations_are_not_merged():
    other_decoder = BOOK_DECODER.replace("decodeBook", "decodeVolume")
    declarations = generate_elm_for_api([
        get_book_request(),
        get_book_request(method="PUT", decoder="decodeVolume", decoder_defs=[other_decoder]),
    ])

    assert BOOK_DECODER in declarations
    assert other_decoder in declarations


def test_api_generation_with_options():
    options = ElmOptions(urlPrefix="/api")
    declarations = generate_elm_for_api_with(options, [get_book_request()])
    assert '"/api"' in declarations[-1]


def test_structured_declarations_render_like_raw_text():
    decl = FunctionDecl("answer", "Int", [], Var("42"))
    request = get_book_request(decoder_defs=[decl, "answer : Int\nanswer =\n  42"])
    declarations = generate_elm_for_api([request])
    assert declarations.count("answer : Int\nanswer =\n  42") == 1


# === MODULES === #

def test_module_rendering():
    source = render_elm_module("Generated.Api", ["a : Int\na =\n  1"])

    assert source.startswith("module Generated.Api exposing (..)\n")
    assert "import Json.Decode exposing ((:=))\nimport Json.Decode.Extra exposing ((|:))" in source
    assert source.endswith("a : Int\na =\n  1\n")


def test_specs_to_dir(tmp_path):
    spec = ElmSpec(module_name="Generated.Api", declarations=["a : Int\na =\n  1"])

    written = specs_to_dir([spec], str(tmp_path))

    expected_path = tmp_path / "Generated" / "Api.elm"
    assert expected_path.exists()
    assert written == {str(expected_path): expected_path.read_text(encoding="utf-8")}
