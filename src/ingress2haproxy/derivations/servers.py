"""Server builder: classify ingress servers into HAProxy frontends.

    default server ('_')          -> default slot only
    no certificate                -> HTTP
    certificate, ssl_redirect     -> HTTPS
    certificate, no ssl_redirect  -> HTTPS and HTTP
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ingress2haproxy.derivations.locations import build_locations
from ingress2haproxy.models.haproxy import HAProxyServer, Userlist
from ingress2haproxy.models.ingress import Server


def server_ssl_redirect(server: Server) -> bool:
    """True if every location of the server requires an SSL redirect.

    A server without locations redirects.
    """
    return all(location.redirect.ssl_redirect for location in server.locations)


def build_server(userlists: Mapping[str, Userlist], server: Server) -> HAProxyServer:
    """Build the HAProxy view of a single ingress server."""
    locations, root_location = build_locations(userlists, server)
    return HAProxyServer(
        is_default_server=server.is_default,
        hostname=server.hostname,
        ssl_certificate=server.ssl_certificate,
        ssl_pem_checksum=server.ssl_pem_checksum,
        root_location=root_location,
        locations=locations,
        ssl_redirect=server_ssl_redirect(server),
    )


def build_servers(
    userlists: Mapping[str, Userlist],
    servers: Sequence[Server],
) -> tuple[list[HAProxyServer], list[HAProxyServer], HAProxyServer | None]:
    """Partition servers into HTTP, HTTPS and default.

    HTTPS servers that do not force a redirect are also served on the
    HTTP frontend, so plain port 80 traffic keeps being proxied. Both
    sequences preserve the input order.

    Returns:
        (http_servers, https_servers, default_server)
    """
    http_servers: list[HAProxyServer] = []
    https_servers: list[HAProxyServer] = []
    default_server: HAProxyServer | None = None

    for server in servers:
        ha_server = build_server(userlists, server)
        if ha_server.is_default_server:
            default_server = ha_server
        elif not ha_server.is_https:
            http_servers.append(ha_server)
        else:
            https_servers.append(ha_server)
            if not ha_server.ssl_redirect:
                http_servers.append(ha_server)

    return http_servers, https_servers, default_server
