"""
ElmKit App Integration

Config-driven integration API for ElmKit with FastAPI applications.
Orchestrates route collection, request descriptor building, Elm code
generation and writing of the generated module.
"""

import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi.routing import APIRoute
from typing import List, Dict, Tuple, Optional

from elmkit.core.schema import ElmRequest, InvalidRequestError, UnsupportedRouteError
from elmkit.core.constants import HTTP_METHODS
from elmkit.core.config import load_elmkit_config, ElmKitConfig
from elmkit.introspection.routes import route_to_requests
from elmkit.generators.elm.emitter import generate_elm_for_api_with
from elmkit.generators.elm.modules import ElmSpec, specs_to_dir


logger = logging.getLogger(__name__)


def integrate(
    app: FastAPI,
    project_root: Optional[str] = None,
    verbose: bool = False,
    **overrides
) -> Tuple[List[str], Dict[str, str]]:
    """
    Integrate ElmKit with a FastAPI app: generate and write the Elm client module.

    Args:
        app: FastAPI application instance to introspect
        project_root: Project root directory (defaults to current directory)
        verbose: Enable detailed logging output
        **overrides: Options overriding elm.config.json:
            - urlPrefix: base URL for every request
            - module_name: Elm module name, e.g. "Generated.Api"
            - location: output source directory relative to project_root

    Returns:
        Tuple[List[str], Dict[str, str]]:
            - List[str]: Generated Elm declarations
            - Dict[str, str]: Written files mapping (file_path -> content)

    Examples:
        elmkit.integrate(app)
        # Creates: elm/Generated/Api.elm

        elmkit.integrate(app, urlPrefix="https://mydomain.com/api/v1", module_name="Api")

    Routes that cannot be expressed in Elm are skipped with a warning, see
    collect_requests.

    Raises:
        ValueError: If configuration validation fails
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    project_root = _resolve_project_root(project_root)
    config = load_elmkit_config(project_root).with_overrides(**overrides)

    if verbose:
        logger.info("Starting ElmKit integration")
        logger.debug(f"Project root: {project_root}")
        logger.debug(f"URL prefix: {config.options.urlPrefix!r}")
        logger.debug(f"Module: {config.output.moduleName}")
        logger.debug(f"Output location: {config.output.location}")

    requests = collect_requests(app)
    declarations = generate_elm_for_api_with(config.options, requests)

    spec = ElmSpec(module_name=config.output.moduleName, declarations=declarations)
    written = specs_to_dir([spec], str(Path(project_root) / config.output.location))

    if verbose:
        logger.info(f"Generation complete: {len(requests)} requests, {len(declarations)} declarations")
    else:
        print(f"ElmKit: Generated {config.output.moduleName} with {len(declarations)} declarations")

    return declarations, written


def generate_only(
    app: FastAPI,
    project_root: Optional[str] = None,
    **overrides
) -> List[str]:
    """Convenience function to generate declarations without writing to disk."""
    config = load_elmkit_config(_resolve_project_root(project_root)).with_overrides(**overrides)
    return generate_for_config(app, config)


def generate_for_config(app: FastAPI, config: ElmKitConfig) -> List[str]:
    return generate_elm_for_api_with(config.options, collect_requests(app))


def collect_requests(app: FastAPI) -> List[ElmRequest]:
    """
    Introspect all user-defined routes, in declaration order.

    Routes that cannot be expressed in Elm (unsupported bodies, recursive
    models, parameter names that are not valid Elm arguments) are logged as
    warnings and skipped; the rest of the API is still generated.
    """
    requests = []
    for route in _collect_fastapi_routes(app):
        try:
            requests.extend(route_to_requests(route))
        except (UnsupportedRouteError, InvalidRequestError) as e:
            logger.warning(f"Skipping route: {e}")
    return requests


def _resolve_project_root(project_root: Optional[str]) -> str:
    if project_root is None:
        return str(Path.cwd().resolve())
    return str(Path(project_root).resolve())


def _collect_fastapi_routes(app: FastAPI) -> List[APIRoute]:
    """Collect user-defined API routes from FastAPI app."""
    return [route for route in app.routes
            if isinstance(route, APIRoute) and _is_user_defined_route(route)]


def _is_user_defined_route(route: APIRoute) -> bool:
    """Determine if route is user-defined using module-based filtering."""
    endpoint = route.endpoint

    if (not endpoint or not callable(endpoint) or
        not hasattr(endpoint, '__name__') or endpoint.__name__ == '<lambda>' or
        not hasattr(endpoint, '__module__') or not route.methods):
        return False

    system_prefixes = ('fastapi.', 'starlette.')
    if any(endpoint.__module__.startswith(prefix) for prefix in system_prefixes):
        return False

    if not any(method in HTTP_METHODS for method in route.methods):
        return False

    return True
