"""Route resolution for validated documents.

Public API::

    from quire.routing import resolve_routes, route_map

    documents = resolve_routes(validation.valid)
    by_route = route_map(documents)
"""

from quire.routing.resolver import (
    Document,
    attach_routes,
    derive_route,
    find_collisions,
    resolve_route,
    resolve_routes,
    route_map,
    route_to_href,
)

__all__ = [
    "Document",
    "attach_routes",
    "derive_route",
    "find_collisions",
    "resolve_route",
    "resolve_routes",
    "route_map",
    "route_to_href",
]
