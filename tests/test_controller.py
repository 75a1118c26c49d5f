"""Tests for the controller callback pair."""

import pytest

from ingress2haproxy.controller import HAProxyController
from ingress2haproxy.errors import TemplateExecutionError
from ingress2haproxy.generators.haproxy import HAProxyTemplate
from ingress2haproxy.models.haproxy import RenderConfiguration
from ingress2haproxy.models.ingress import IngressConfiguration, Location, Server


class _RecordingRenderer:
    def __init__(self):
        self.configs = []

    def render(self, config: RenderConfiguration) -> bytes:
        self.configs.append(config)
        return b"rendered\n"


SNAPSHOT = IngressConfiguration(
    servers=(
        Server("_", locations=(Location("/", "default-backend"),)),
        Server("web.example.com", locations=(Location("/", "web"),)),
    ),
)


class TestHAProxyController:
    def test_on_update_builds_and_renders(self):
        renderer = _RecordingRenderer()
        controller = HAProxyController(renderer)

        output = controller.on_update(SNAPSHOT, {"syslog-endpoint": "10.0.0.1:514"})

        assert output == b"rendered\n"
        config = renderer.configs[0]
        assert config.default_server.hostname == "_"
        assert config.syslog == "10.0.0.1:514"

    def test_default_renderer_is_packaged_template(self):
        controller = HAProxyController()
        assert isinstance(controller.renderer, HAProxyTemplate)
        output = controller.on_update(SNAPSHOT)
        assert b"default_backend default-backend" in output

    def test_render_errors_propagate(self, tmp_path):
        path = tmp_path / "bad.cfg.j2"
        path.write_text("{{ cfg.missing }}\n")
        controller = HAProxyController(HAProxyTemplate(path))

        with pytest.raises(TemplateExecutionError):
            controller.on_update(SNAPSHOT)

    def test_default_backend_redirects(self):
        assert HAProxyController.default_backend_defaults().ssl_redirect is True
