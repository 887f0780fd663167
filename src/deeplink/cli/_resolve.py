"""Route table import resolution — resolves ``"module:attribute"`` strings.

Shared by ``deeplink inspect`` and ``deeplink routes`` so either can run
against an application's own route table instead of the default one.
"""

import argparse
import importlib
import sys

from deeplink.errors import ConfigurationError
from deeplink.routing.registry import RouteRegistry
from deeplink.routing.route import RouteEntry


def resolve_registry(import_string: str) -> RouteRegistry:
    """Resolve an import string to a compiled ``RouteRegistry``.

    Accepts ``"module:attribute"``. When the attribute portion is omitted,
    defaults to ``"registry"``. The attribute may be a ``RouteRegistry``,
    a sequence of ``RouteEntry``, or a zero-argument factory returning
    either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a route table, or a
            factory raised while building one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "registry"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, RouteRegistry):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Route table factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, RouteRegistry):
        registry = obj
    elif isinstance(obj, (list, tuple)) and all(isinstance(e, RouteEntry) for e in obj):
        registry = RouteRegistry(obj)
    else:
        msg = f"{import_string!r} resolved to {type(obj).__name__}, expected a route table"
        raise TypeError(msg)

    registry.compile()
    return registry


def registry_from_args(args: argparse.Namespace) -> RouteRegistry:
    """The registry named by ``--routes``, or the default table. Exits 1 on error."""
    if not args.routes_from:
        from deeplink.routing.table import default_registry

        return default_registry()
    try:
        return resolve_registry(args.routes_from)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
