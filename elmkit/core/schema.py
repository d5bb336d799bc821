"""
ElmKit Data Models

Request descriptors consumed by the Elm code emitter. A descriptor captures
everything needed to generate one client function: verb, path, query string,
argument list, body encoding and response decoding, plus the auxiliary
declarations (type aliases, decoders, encoders) the endpoint depends on.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

from elmkit.core.nodes import Declaration
from elmkit.core.constants import HTTP_METHODS, ELM_RESERVED_WORDS, GENERATED_BODY_NAMES, BODY_ARG_NAME


_ELM_ARG_PATTERN = re.compile(r"^[a-z][A-Za-z0-9_]*$")


class InvalidRequestError(ValueError):
    """Raised when a request descriptor cannot produce valid Elm code."""


class UnsupportedRouteError(ValueError):
    """Raised for routes and models that generated Elm clients cannot express."""


# === URL MODEL === #

class SegmentType(Enum):
    """Kind of path segment."""
    STATIC = "static"    # Literal path text: /books
    CAPTURE = "capture"  # Captured argument: /{id}


class ArgType(Enum):
    """Kind of query string argument."""
    NORMAL = "normal"    # ?name=value, optional value
    FLAG = "flag"        # ?name, present when true
    LIST = "list"        # ?name[]=a&name[]=b


@dataclass(frozen=True)
class Segment:
    segment_type: SegmentType
    name: str

    @classmethod
    def static(cls, text: str) -> 'Segment':
        return cls(SegmentType.STATIC, text)

    @classmethod
    def capture(cls, name: str) -> 'Segment':
        return cls(SegmentType.CAPTURE, name)

    @property
    def is_capture(self) -> bool:
        return self.segment_type == SegmentType.CAPTURE


@dataclass(frozen=True)
class QueryArg:
    name: str
    arg_type: ArgType = ArgType.NORMAL


# === REQUEST DESCRIPTOR === #

@dataclass(frozen=True)
class ElmRequest:
    """
    One API endpoint, normalized for code generation.

    ``arg_names`` and ``arg_types`` run in the generated function's parameter
    order: path captures left to right, then query arguments, then the body
    argument when the endpoint takes one. The result type is kept apart in
    ``result_type`` and always closes the signature.

    Raises:
        InvalidRequestError: If the descriptor is inconsistent. The message
            names the offending endpoint.
    """
    method: str
    path_segments: List[Segment] = field(default_factory=list)
    query_args: List[QueryArg] = field(default_factory=list)
    arg_names: List[str] = field(default_factory=list)
    arg_types: List[str] = field(default_factory=list)
    result_type: str = "()"
    decoder: str = "(Json.Decode.succeed ())"
    body_encoder: Optional[str] = None
    type_defs: List[Declaration] = field(default_factory=list)
    decoder_defs: List[Declaration] = field(default_factory=list)
    encoder_defs: List[Declaration] = field(default_factory=list)

    def __post_init__(self):
        self.validate()

    @property
    def path(self) -> str:
        """Display path such as ``/books/{id}``."""
        parts = [f"{{{s.name}}}" if s.is_capture else s.name for s in self.path_segments]
        return "/" + "/".join(parts)

    @property
    def has_body(self) -> bool:
        return self.body_encoder is not None

    @property
    def captures(self) -> List[str]:
        return [s.name for s in self.path_segments if s.is_capture]

    def validate(self):
        """Check the descriptor against the generator's input contract."""
        endpoint = f"{self.method} {self.path}"

        if self.method not in HTTP_METHODS:
            raise InvalidRequestError(f"{endpoint}: unsupported HTTP method '{self.method}'")

        if len(self.arg_names) != len(self.arg_types):
            raise InvalidRequestError(
                f"{endpoint}: {len(self.arg_names)} argument names but {len(self.arg_types)} argument types"
            )

        seen = set()
        for name in self.arg_names:
            if not _ELM_ARG_PATTERN.match(name) or name in ELM_RESERVED_WORDS:
                raise InvalidRequestError(f"{endpoint}: '{name}' is not a valid Elm argument name")
            if name in GENERATED_BODY_NAMES:
                raise InvalidRequestError(f"{endpoint}: argument '{name}' clashes with a name used by the generated function")
            if name in seen:
                raise InvalidRequestError(f"{endpoint}: duplicate argument '{name}'")
            seen.add(name)

        for name in self.captures:
            if name not in seen:
                raise InvalidRequestError(f"{endpoint}: path capture '{name}' has no matching argument")

        for query_arg in self.query_args:
            if query_arg.name not in seen:
                raise InvalidRequestError(f"{endpoint}: query argument '{query_arg.name}' has no matching argument")

        if self.body_encoder is not None:
            if not self.arg_names or self.arg_names[-1] != BODY_ARG_NAME:
                raise InvalidRequestError(
                    f"{endpoint}: body encoder '{self.body_encoder}' given but '{BODY_ARG_NAME}' is not the last argument"
                )
        elif BODY_ARG_NAME in seen:
            raise InvalidRequestError(f"{endpoint}: '{BODY_ARG_NAME}' argument given without a body encoder")

        if not self.decoder.strip():
            raise InvalidRequestError(f"{endpoint}: missing response decoder")
        if not self.result_type.strip():
            raise InvalidRequestError(f"{endpoint}: missing result type")
