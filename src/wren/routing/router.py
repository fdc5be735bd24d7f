"""Compiled resource router.

Static resources live in a dict keyed by exact URI. Templates live in a
list and are tried in registration order. Both are built during setup
and treated as read-only once ``compile()`` has run, so concurrent
readers need no lock.
"""

import logging

from wren.errors import ConfigurationError, NotFound
from wren.routing.resource import Resource, ResourceMatch, ResourceTemplate

logger = logging.getLogger("wren.routing")


class ResourceRouter:
    """Resolve resource URIs to their registration and placeholder binding.

    Usage::

        router = ResourceRouter()
        router.add_resource(Resource("system://info", "System Information", handler))
        router.add_template(ResourceTemplate(UriTemplate.compile("users://{id}"), "User", handler))
        router.compile()
        match = router.resolve("users://7")   # match.params == {"id": "7"}

    Resolution order:
        1. Exact static URI (a static entry always beats a template).
        2. Templates, first registered wins.
        3. ``NotFound``.
    """

    __slots__ = ("_compiled", "_static", "_templates")

    def __init__(self) -> None:
        self._static: dict[str, Resource] = {}
        self._templates: list[ResourceTemplate] = []
        self._compiled = False

    def add_resource(self, resource: Resource) -> None:
        """Add a static resource. Must be called before compile()."""
        self._check_not_compiled()
        if resource.uri in self._static:
            msg = f"Duplicate resource URI: {resource.uri!r}"
            raise ConfigurationError(msg)
        self._static[resource.uri] = resource

    def add_template(self, template: ResourceTemplate) -> None:
        """Add a template resource. Must be called before compile()."""
        self._check_not_compiled()
        if any(t.pattern == template.pattern for t in self._templates):
            msg = f"Duplicate resource template: {template.pattern!r}"
            raise ConfigurationError(msg)
        self._templates.append(template)

    def compile(self) -> None:
        """Freeze the router. No more registrations can be added."""
        self._compiled = True

    @property
    def resources(self) -> tuple[Resource, ...]:
        """Static resources in registration order."""
        return tuple(self._static.values())

    @property
    def templates(self) -> tuple[ResourceTemplate, ...]:
        """Templates in registration order."""
        return tuple(self._templates)

    def resolve(self, uri: str) -> ResourceMatch:
        """Match *uri* against static resources, then templates.

        Returns a ``ResourceMatch`` on success.
        Raises ``NotFound`` if nothing matches.
        """
        resource = self._static.get(uri)
        if resource is not None:
            return ResourceMatch(resource=resource, params={})

        for template in self._templates:
            params = template.template.match(uri)
            if params is not None:
                logger.debug("%s matched template %s %s", uri, template.pattern, params)
                return ResourceMatch(resource=template, params=params)

        raise NotFound(uri)

    def _check_not_compiled(self) -> None:
        if self._compiled:
            msg = "Cannot add resources after compilation."
            raise RuntimeError(msg)
