"""Resource, ResourceTemplate, and ResourceMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from wren.routing.template import UriTemplate


@dataclass(frozen=True, slots=True)
class Annotations:
    """Client hints attached to a resource listing.

    ``audience`` names who the content is meant for (``"user"``,
    ``"assistant"``). ``priority`` ranges from 0.0 (optional) to 1.0
    (effectively required).
    """

    audience: tuple[str, ...] = ()
    priority: float | None = None


@dataclass(frozen=True, slots=True)
class Resource:
    """A static resource: one exact URI bound to one handler.

    Created during app setup, compiled into the router at freeze time.
    """

    uri: str
    name: str
    handler: Callable[..., Any]
    description: str = ""
    mime_type: str = "text/plain"
    annotations: Annotations | None = None


@dataclass(frozen=True, slots=True)
class ResourceTemplate:
    """A template resource: a URI pattern with placeholders bound to one handler."""

    template: UriTemplate
    name: str
    handler: Callable[..., Any]
    description: str = ""
    mime_type: str = "text/plain"
    annotations: Annotations | None = None

    @property
    def pattern(self) -> str:
        return self.template.pattern


@dataclass(frozen=True, slots=True)
class ResourceMatch:
    """Result of a successful resolve: the registration plus its placeholder binding."""

    resource: Resource | ResourceTemplate
    params: dict[str, str] = field(default_factory=dict)
