"""Data models for ingress snapshots and rendered HAProxy configuration."""

from ingress2haproxy.models.haproxy import (
    AuthUser,
    HAProxyLocation,
    HAProxyServer,
    RenderConfiguration,
    Userlist,
)
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

__all__ = [
    "AuthUser",
    "Backend",
    "BasicDigestAuth",
    "Endpoint",
    "HAProxyLocation",
    "HAProxyServer",
    "IngressConfiguration",
    "L4Backend",
    "L4Service",
    "Location",
    "Redirect",
    "RenderConfiguration",
    "SSLPassthroughBackend",
    "Server",
    "Userlist",
    "Whitelist",
]
