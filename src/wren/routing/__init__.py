"""Routing — static and templated resource URIs resolved to handlers.

Resources are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from wren.routing.resource import Annotations, Resource, ResourceMatch, ResourceTemplate
from wren.routing.router import ResourceRouter
from wren.routing.template import UriTemplate, parse_template

__all__ = [
    "Annotations",
    "Resource",
    "ResourceMatch",
    "ResourceRouter",
    "ResourceTemplate",
    "UriTemplate",
    "parse_template",
]
