"""HAProxy backend for a generic ingress controller.

The controller host discovers ingress resources, and on every change
calls on_update() with a fresh snapshot and the operator overrides.
The bytes returned are written to the HAProxy configuration path by
the host, which also reloads the proxy.
"""

from __future__ import annotations

from collections.abc import Mapping

from ingress2haproxy.derivations.config_builder import build_configuration
from ingress2haproxy.generators.base import Renderer
from ingress2haproxy.generators.haproxy import HAProxyTemplate
from ingress2haproxy.models.haproxy import RenderConfiguration
from ingress2haproxy.models.ingress import IngressConfiguration, Redirect


class HAProxyController:
    """Build and render HAProxy configuration for the ingress host.

    Holds a single renderer for its whole lifetime. Calls must be
    serialized by the host.
    """

    def __init__(self, renderer: Renderer | None = None) -> None:
        self.renderer = renderer if renderer is not None else HAProxyTemplate.default()

    @staticmethod
    def default_backend_defaults() -> Redirect:
        """Backend settings applied to locations without annotations."""
        return Redirect(ssl_redirect=True)

    def build_configuration(
        self,
        snapshot: IngressConfiguration,
        overrides: Mapping[str, str] | None = None,
    ) -> RenderConfiguration:
        return build_configuration(snapshot, overrides)

    def render(self, config: RenderConfiguration) -> bytes:
        return self.renderer.render(config)

    def on_update(
        self,
        snapshot: IngressConfiguration,
        overrides: Mapping[str, str] | None = None,
    ) -> bytes:
        """Run one full pass: build the configuration and render it.

        Raises:
            RenderError: If rendering fails; the previous configuration
                should be left in place.
        """
        return self.render(self.build_configuration(snapshot, overrides))
