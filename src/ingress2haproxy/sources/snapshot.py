"""Load an ingress snapshot from JSON.

The controller host normally builds IngressConfiguration objects
directly. The JSON form lets the CLI and tests feed the same pipeline
from a file. Keys mirror the model field names:

    {
      "backends": [{"name": "default-web-8080", "endpoints": [...]}],
      "servers": [{"hostname": "_", "locations": [{"path": "/", ...}]}],
      "tcp_endpoints": [], "udp_endpoints": [],
      "passthrough_backends": [{"backend": "...", "hostname": "..."}]
    }

Missing keys take the model defaults. No semantic validation happens
here; that is the host's responsibility.
"""

from __future__ import annotations

import json
from pathlib import Path

from ingress2haproxy.models.ingress import (
    Backend,
    BasicDigestAuth,
    Endpoint,
    IngressConfiguration,
    L4Backend,
    L4Service,
    Location,
    Redirect,
    Server,
    SSLPassthroughBackend,
    Whitelist,
)


def _build_endpoints(data: list[dict] | None) -> tuple[Endpoint, ...]:
    return tuple(
        Endpoint(
            address=e["address"],
            port=int(e["port"]),
            max_fails=int(e.get("max_fails", 0)),
            fail_timeout=int(e.get("fail_timeout", 0)),
        )
        for e in data or []
    )


def _build_backend(data: dict) -> Backend:
    return Backend(
        name=data["name"],
        service=data.get("service", ""),
        port=int(data.get("port", 0)),
        secure=bool(data.get("secure", False)),
        endpoints=_build_endpoints(data.get("endpoints")),
    )


def _build_l4_service(data: dict) -> L4Service:
    backend = data.get("backend", {})
    return L4Service(
        port=int(data["port"]),
        backend=L4Backend(
            name=backend.get("name", ""),
            namespace=backend.get("namespace", ""),
            port=int(backend.get("port", 0)),
        ),
        endpoints=_build_endpoints(data.get("endpoints")),
    )


def _build_location(data: dict, default_ssl_redirect: bool) -> Location:
    redirect = data.get("redirect", {})
    auth = data.get("basic_digest_auth", {})
    whitelist = data.get("whitelist", {})
    return Location(
        path=data["path"],
        backend=data.get("backend", ""),
        redirect=Redirect(
            ssl_redirect=bool(redirect.get("ssl_redirect", default_ssl_redirect)),
            force_ssl_redirect=bool(redirect.get("force_ssl_redirect", False)),
            app_root=redirect.get("app_root", ""),
            target=redirect.get("target", ""),
        ),
        basic_digest_auth=BasicDigestAuth(
            type=auth.get("type", ""),
            realm=auth.get("realm", ""),
            file=auth.get("file", ""),
        ),
        whitelist=Whitelist(cidr=tuple(whitelist.get("cidr", []))),
    )


def _build_server(data: dict, default_ssl_redirect: bool) -> Server:
    return Server(
        hostname=data["hostname"],
        ssl_certificate=data.get("ssl_certificate", ""),
        ssl_pem_checksum=data.get("ssl_pem_checksum", ""),
        locations=tuple(
            _build_location(loc, default_ssl_redirect)
            for loc in data.get("locations", [])
        ),
    )


def parse_snapshot(data: dict, default_ssl_redirect: bool = True) -> IngressConfiguration:
    """Build an IngressConfiguration from decoded JSON data.

    Args:
        data: Decoded snapshot document.
        default_ssl_redirect: Redirect policy for locations that do not
            declare one, normally the controller's backend default.

    Raises:
        KeyError: If a required field (backend name, server hostname,
            location path, endpoint address/port) is missing.
    """
    return IngressConfiguration(
        backends=tuple(_build_backend(b) for b in data.get("backends", [])),
        servers=tuple(
            _build_server(s, default_ssl_redirect) for s in data.get("servers", [])
        ),
        tcp_endpoints=tuple(_build_l4_service(s) for s in data.get("tcp_endpoints", [])),
        udp_endpoints=tuple(_build_l4_service(s) for s in data.get("udp_endpoints", [])),
        passthrough_backends=tuple(
            SSLPassthroughBackend(backend=p["backend"], hostname=p.get("hostname", ""))
            for p in data.get("passthrough_backends", [])
        ),
    )


def load_snapshot(path: Path | str, default_ssl_redirect: bool = True) -> IngressConfiguration:
    """Load an ingress snapshot from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    return parse_snapshot(data, default_ssl_redirect=default_ssl_redirect)
