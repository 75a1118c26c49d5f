"""HAProxy-side models: what the template actually consumes.

These are rebuilt from an IngressConfiguration on every pass by the
derivations package. They fill in the pieces an ingress server lacks
when it has to be expressed as HAProxy frontends and ACLs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ingress2haproxy.models.ingress import (
    Backend,
    L4Service,
    Redirect,
    SSLPassthroughBackend,
)


@dataclass(frozen=True)
class AuthUser:
    """A user entry of an HAProxy userlist.

    encrypted is False for passwords written as 'user::password', which
    HAProxy must receive as 'insecure-password'.
    """

    username: str
    password: str
    encrypted: bool = True


@dataclass(frozen=True)
class Userlist:
    """A named, realm-scoped set of basic auth credentials.

    The empty Userlist (no list_name) means no authentication.
    """

    list_name: str = ""
    realm: str = ""
    users: tuple[AuthUser, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.list_name)


@dataclass
class HAProxyLocation:
    """An ingress location with its HAProxy match expressions.

    Attributes:
        is_root_location: True for the '/' location
        path: Path prefix as declared on the ingress
        backend: Name of the backend serving this location
        redirect: Redirect policy copied from the ingress location
        userlist: Resolved credentials, empty when no auth is required
        ha_match_path: ACL fragment matching requests for this location,
            e.g. ' { path_beg /api }'
        ha_whitelist: Space-prefixed CIDR list, '' when unrestricted
    """

    is_root_location: bool
    path: str
    backend: str
    redirect: Redirect = field(default_factory=Redirect)
    userlist: Userlist = field(default_factory=Userlist)
    ha_match_path: str = ""
    ha_whitelist: str = ""


@dataclass
class HAProxyServer:
    """An ingress server with the flags HAProxy frontends need."""

    is_default_server: bool
    hostname: str
    ssl_certificate: str = ""
    ssl_pem_checksum: str = ""
    root_location: HAProxyLocation | None = None
    locations: list[HAProxyLocation] = field(default_factory=list)
    ssl_redirect: bool = True

    @property
    def is_https(self) -> bool:
        return bool(self.ssl_certificate)


@dataclass
class RenderConfiguration:
    """Everything the HAProxy template renders from.

    The first block of fields is derived from the ingress snapshot. The
    second block holds operator settings, filled with defaults and then
    patched from the override map (see derivations.overrides).
    """

    userlists: dict[str, Userlist] = field(default_factory=dict)
    backends: list[Backend] = field(default_factory=list)
    default_server: HAProxyServer | None = None
    http_servers: list[HAProxyServer] = field(default_factory=list)
    https_servers: list[HAProxyServer] = field(default_factory=list)
    tcp_endpoints: list[L4Service] = field(default_factory=list)
    udp_endpoints: list[L4Service] = field(default_factory=list)
    passthrough_backends: list[SSLPassthroughBackend] = field(default_factory=list)

    syslog: str = ""
    max_connections: int = 2000
    balance_algorithm: str = "roundrobin"
    forwardfor: bool = True
    timeout_connect: str = "5s"
    timeout_client: str = "50s"
    timeout_server: str = "50s"
    timeout_http_request: str = "5s"
    timeout_keep_alive: str = "1m"
    timeout_tunnel: str = "1h"
