"""
Function name synthesis for generated Elm clients.
"""

import re
from typing import List

from elmkit.core.schema import Segment
from elmkit.core.constants import CAPTURE_NAME_TOKEN


_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")


def synthesize_name(method: str, segments: List[Segment]) -> str:
    """
    Derive the client function name for an endpoint.

    The lower-cased verb leads, followed by one token per path segment from
    root to leaf. Captured segments contribute "by", so ``GET /books/{id}``
    becomes ``getBooksBy`` and ``GET /books/{id}/authors`` becomes
    ``getBooksByAuthors``.
    """
    tokens = [method.lower()]
    for segment in segments:
        tokens.append(CAPTURE_NAME_TOKEN if segment.is_capture else segment.name)
    return camel_case(tokens)


def camel_case(tokens: List[str]) -> str:
    """
    Join tokens into one identifier: first word as given, every later word
    capitalized, anything that is not an ASCII letter or digit dropped.
    """
    words = []
    for token in tokens:
        words.extend(word for word in _WORD_SPLIT.split(token) if word)

    if not words:
        return ""

    return words[0] + "".join(_capitalize(word) for word in words[1:])


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
