"""
ElmKit constants for generated Elm code
"""

class ElmRuntime:
    """Elm library names referenced by generated code"""

    TASK_TYPE = "Task.Task"
    ERROR_TYPE = "Http.Error"
    URI_ENCODE_FN = "Http.uriEncode"
    TO_STRING_FN = "toString"
    FROM_JSON_FN = "Http.fromJson"
    SEND_FN = "Http.send"
    DEFAULT_SETTINGS = "Http.defaultSettings"
    EMPTY_BODY = "Http.empty"
    STRING_BODY_FN = "Http.string"
    ENCODE_FN = "Json.Encode.encode"

    # Fixed request metadata
    CONTENT_TYPE_HEADER = ("Content-Type", "application/json")

    @classmethod
    def get_error_task(cls) -> str:
        """Get the task type constructor with its error arm applied"""
        return f"{cls.TASK_TYPE} {cls.ERROR_TYPE}"


DEFAULT_ELM_IMPORTS = [
    "import Json.Decode exposing ((:=))",
    "import Json.Decode.Extra exposing ((|:))",
    "import Json.Encode",
    "import Http",
    "import String",
    "import Task",
]

HTTP_METHODS = {'GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'HEAD', 'OPTIONS', 'TRACE'}

ELM_RESERVED_WORDS = {
    "if", "then", "else", "case", "of", "let", "in", "type", "module",
    "where", "import", "exposing", "as", "port", "infix", "infixl", "infixr",
}

# Argument name used for request bodies in generated functions
BODY_ARG_NAME = "body"

# Let-bindings of every generated request function
PARAMS_BINDING = "params"
REQUEST_BINDING = "request"

# Names the generated function body refers to unqualified; arguments may not shadow them
GENERATED_BODY_NAMES = {PARAMS_BINDING, REQUEST_BINDING, "not", "toString", "identity", "always"}

# Token used in function names in place of a captured path segment
CAPTURE_NAME_TOKEN = "by"

COMMON_TYPE_MAP = {
    "UUID": "String",
    "Decimal": "Float",
    "datetime": "String",
    "date": "String",
    "time": "String",
    "Path": "String",
    "EmailStr": "String",
    "HttpUrl": "String",
    "AnyUrl": "String",
}
