"""Renderer protocol: the interface the controller renders through."""

from __future__ import annotations

from typing import Protocol

from ingress2haproxy.models.haproxy import RenderConfiguration


class Renderer(Protocol):
    """Protocol for configuration renderers.

    A renderer takes a fully built RenderConfiguration and produces the
    bytes of the proxy configuration file. It should contain zero data
    derivation logic; everything it needs is already in the model.
    """

    def render(self, config: RenderConfiguration) -> bytes:
        """Render the proxy configuration."""
        ...
