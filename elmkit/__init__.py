"""
ElmKit - Elm client code generation for FastAPI
"""

def _check_dependencies():
    """Check for required dependencies"""
    missing = []

    try:
        import fastapi
    except ImportError:
        missing.append("fastapi")

    try:
        import pydantic
    except ImportError:
        missing.append("pydantic")

    if missing:
        deps = " and ".join(missing)
        raise ImportError(
            f"ElmKit requires {deps} to be installed.\n"
            f"Install with: pip install {' '.join(missing)}\n"
            f"ElmKit works with your existing {deps} versions."
        )

# Check dependencies on import
_check_dependencies()

# Import main API only after dependency check
from .core.config import get_version, ElmOptions, DEFAULT_ELM_OPTIONS
from .core.constants import DEFAULT_ELM_IMPORTS
from .core.schema import ElmRequest, Segment, SegmentType, QueryArg, ArgType, InvalidRequestError, UnsupportedRouteError
from .core.integrator import integrate, generate_only
from .generators.elm import generate_elm_for_api, generate_elm_for_api_with, generate_elm_for_request

__version__ = get_version()

__all__ = [
    # Main functions
    'integrate',
    'generate_only',
    'generate_elm_for_api',
    'generate_elm_for_api_with',
    'generate_elm_for_request',

    # Options and descriptors
    'ElmOptions',
    'DEFAULT_ELM_OPTIONS',
    'DEFAULT_ELM_IMPORTS',
    'ElmRequest',
    'Segment',
    'SegmentType',
    'QueryArg',
    'ArgType',
    'InvalidRequestError',
    'UnsupportedRouteError',

    # Version
    '__version__'
]
