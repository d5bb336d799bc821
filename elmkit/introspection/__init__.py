"""
ElmKit introspection utilities - for advanced users building custom tools
"""

# Main introspection functions
from .routes import route_to_requests, parse_path, UnsupportedRouteError
from .models import discover_models, model_declarations

# Lower-level builders for individual declarations
from .models import elm_field_name, generate_type_alias, generate_decoder, generate_encoder


__all__ = [
    # High-level functions
    'route_to_requests',
    'discover_models',
    'model_declarations',

    # Lower-level functions for extensions
    'parse_path', 'elm_field_name', 'generate_type_alias', 'generate_decoder', 'generate_encoder',

    # Errors
    'UnsupportedRouteError',
]
