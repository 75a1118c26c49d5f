"""Configuration assembler: ingress snapshot to RenderConfiguration.

This is the central derivation that runs the builders in order
(credentials, then servers and their locations) and merges operator
overrides into the result.
"""

from __future__ import annotations

from collections.abc import Mapping

from ingress2haproxy.derivations.overrides import merge_overrides
from ingress2haproxy.derivations.servers import build_servers
from ingress2haproxy.derivations.userlists import build_userlists
from ingress2haproxy.models.haproxy import RenderConfiguration
from ingress2haproxy.models.ingress import IngressConfiguration


def build_configuration(
    snapshot: IngressConfiguration,
    overrides: Mapping[str, str] | None = None,
) -> RenderConfiguration:
    """Build the render-ready configuration for one pass.

    Backends, L4 endpoints and passthrough backends are passed through
    unchanged. Override decode failures are logged by merge_overrides
    and never fail the build.
    """
    userlists = build_userlists(snapshot.servers)
    http_servers, https_servers, default_server = build_servers(
        userlists, snapshot.servers,
    )

    config = RenderConfiguration(
        userlists=userlists,
        backends=list(snapshot.backends),
        default_server=default_server,
        http_servers=http_servers,
        https_servers=https_servers,
        tcp_endpoints=list(snapshot.tcp_endpoints),
        udp_endpoints=list(snapshot.udp_endpoints),
        passthrough_backends=list(snapshot.passthrough_backends),
    )
    merge_overrides(config, overrides)
    return config
