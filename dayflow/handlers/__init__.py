"""
Handler modules with automatic API registration
Functions decorated with @api_handler are collected in a registry and mounted
on a FastAPI app by register_fastapi_routes()
"""

import inspect
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    TypeVar,
)

from dayflow.core.logger import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Global API handler registry
_handler_registry: Dict[str, Dict[str, Any]] = {}

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def api_handler(
    method: str = "GET",
    path: Optional[str] = None,
    tags: Optional[List[str]] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    status_code: Optional[int] = None,
):
    """
    API handler decorator

    @param method - HTTP method (GET, POST, PATCH, DELETE, etc.)
    @param path - Route path below the API prefix, defaults to /<function name>
    @param tags - API tags, defaults to the module name
    @param summary - API summary, defaults to the first docstring line
    @param description - API description, defaults to the docstring
    @param status_code - Documented success status code
    """

    def decorator(func: F) -> F:
        func_name = getattr(func, "__name__", "unknown")
        func_module = getattr(func, "__module__", "")
        module_name = func_module.split(".")[-1] if func_module else "unknown"
        func_doc = inspect.getdoc(func)

        _handler_registry[func_name] = {
            "func": func,
            "method": method.upper(),
            "path": path or f"/{func_name}",
            "tags": tags or [module_name],
            "module": module_name,
            "summary": summary or (func_doc.split("\n")[0] if func_doc else func_name),
            "description": description or func_doc or "",
            "status_code": status_code,
        }

        # Keep original function unchanged
        return func

    return decorator


def get_registered_handlers() -> Dict[str, Dict[str, Any]]:
    """
    Get registered handler information (for debugging)

    @returns Handler registry
    """
    return _handler_registry.copy()


def register_fastapi_routes(app: "FastAPI", prefix: str = "/api") -> None:
    """
    Register all functions decorated with @api_handler as FastAPI routes

    @param app - FastAPI application instance
    @param prefix - Route prefix
    """
    logger.debug(f"Starting FastAPI route registration, {len(_handler_registry)} handlers")

    for handler_name, handler_info in _handler_registry.items():
        method = handler_info["method"]
        full_path = f"{prefix}{handler_info['path']}"

        if method not in SUPPORTED_METHODS:
            logger.warning(f"Unknown HTTP method: {method} for {handler_name}")
            continue

        route_params: Dict[str, Any] = {
            "path": full_path,
            "methods": [method],
            "tags": handler_info["tags"],
            "summary": handler_info["summary"],
            "description": handler_info["description"],
            "response_model": None,
        }
        if handler_info["status_code"] is not None:
            route_params["status_code"] = handler_info["status_code"]

        app.add_api_route(endpoint=handler_info["func"], **route_params)
        logger.debug(
            f"✓ Registered route: {method} {full_path} ({handler_name} from {handler_info['module']})"
        )

    logger.info(f"FastAPI route registration completed: {len(_handler_registry)} routes")


# Import all handler modules to trigger decorator registration
# Note: These imports must be after all decorator definitions to avoid circular imports
# ruff: noqa: E402
from . import export, ideas, links, settings, tasks

__all__ = [
    "api_handler",
    "register_fastapi_routes",
    "get_registered_handlers",
    "tasks",
    "ideas",
    "links",
    "settings",
    "export",
]
