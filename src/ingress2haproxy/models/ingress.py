"""Ingress snapshot models: the load-balancer agnostic input.

These mirror what the ingress controller host hands over on every
update: backends, virtual servers with their locations, L4 endpoints
and SSL passthrough rules. Nothing here is HAProxy specific, and the
pipeline never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Ingress uses the `_` hostname for the catch-all server.
DEFAULT_SERVER_HOSTNAME = "_"


@dataclass(frozen=True)
class Endpoint:
    """A single upstream address:port of a backend."""

    address: str
    port: int
    max_fails: int = 0
    fail_timeout: int = 0


@dataclass(frozen=True)
class Backend:
    """A pool of upstream endpoints, identified by name.

    Attributes:
        name: Unique backend name (e.g. 'default-web-8080')
        service: Source service as 'namespace/name', if known
        port: Service port the backend was built from
        secure: True if the upstream speaks HTTPS
        endpoints: Resolved upstream endpoints
    """

    name: str
    service: str = ""
    port: int = 0
    secure: bool = False
    endpoints: tuple[Endpoint, ...] = ()


@dataclass(frozen=True)
class L4Backend:
    """The service a TCP/UDP endpoint forwards to."""

    name: str
    namespace: str = ""
    port: int = 0


@dataclass(frozen=True)
class L4Service:
    """A TCP or UDP passthrough rule listening on a fixed port."""

    port: int
    backend: L4Backend
    endpoints: tuple[Endpoint, ...] = ()


@dataclass(frozen=True)
class SSLPassthroughBackend:
    """A backend whose TLS traffic must not be terminated by the proxy."""

    backend: str
    hostname: str = ""


@dataclass(frozen=True)
class Redirect:
    """Redirect policy of a location.

    ssl_redirect defaults to True, the controller's default backend
    setting for locations without an explicit annotation.
    """

    ssl_redirect: bool = True
    force_ssl_redirect: bool = False
    app_root: str = ""
    target: str = ""


@dataclass(frozen=True)
class BasicDigestAuth:
    """Basic or digest authentication requirement of a location.

    Attributes:
        type: 'basic', 'digest', or '' when no auth is configured
        realm: Realm shown to the client
        file: Path of the htpasswd-style credential file
    """

    type: str = ""
    realm: str = ""
    file: str = ""


@dataclass(frozen=True)
class Whitelist:
    """Source IP allowlist of a location."""

    cidr: tuple[str, ...] = ()


@dataclass(frozen=True)
class Location:
    """A path prefix of a virtual server routed to one backend."""

    path: str
    backend: str
    redirect: Redirect = field(default_factory=Redirect)
    basic_digest_auth: BasicDigestAuth = field(default_factory=BasicDigestAuth)
    whitelist: Whitelist = field(default_factory=Whitelist)


@dataclass(frozen=True)
class Server:
    """A virtual server: a hostname, optional TLS binding and locations."""

    hostname: str
    ssl_certificate: str = ""
    ssl_pem_checksum: str = ""
    locations: tuple[Location, ...] = ()

    @property
    def is_default(self) -> bool:
        return self.hostname == DEFAULT_SERVER_HOSTNAME


@dataclass(frozen=True)
class IngressConfiguration:
    """The host-provided snapshot of desired routing state for one pass."""

    backends: tuple[Backend, ...] = ()
    servers: tuple[Server, ...] = ()
    tcp_endpoints: tuple[L4Service, ...] = ()
    udp_endpoints: tuple[L4Service, ...] = ()
    passthrough_backends: tuple[SSLPassthroughBackend, ...] = ()
