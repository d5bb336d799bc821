"""
Elm client generation.

Main entry points for turning request descriptors into Elm declarations and
modules.
"""

from .emitter import (
    deduplicate,
    build_function,
    generate_elm_for_api,
    generate_elm_for_request,
    generate_elm_for_api_with,
)
from .names import synthesize_name, camel_case
from .signatures import build_signature
from .urls import build_url, render_query_arg
from .printer import render_declaration, render_expression
from .modules import ElmSpec, render_elm_module, specs_to_dir


__all__ = [
    # Main entry points
    'generate_elm_for_api',
    'generate_elm_for_api_with',
    'generate_elm_for_request',

    # Building blocks
    'build_url',
    'camel_case',
    'deduplicate',
    'build_function',
    'build_signature',
    'synthesize_name',
    'render_query_arg',
    'render_expression',
    'render_declaration',

    # Module output
    'ElmSpec',
    'specs_to_dir',
    'render_elm_module',
]
