"""Location builder: ingress locations to HAProxy ACL fragments."""

from __future__ import annotations

from collections.abc import Mapping

from ingress2haproxy.models.haproxy import HAProxyLocation, Userlist
from ingress2haproxy.models.ingress import Location, Server

ROOT_PATH = "/"


def whitelist_expression(location: Location) -> str:
    """Concatenate the allowlist CIDRs, each prefixed with a space."""
    return "".join(f" {cidr}" for cidr in location.whitelist.cidr)


def build_locations(
    userlists: Mapping[str, Userlist],
    server: Server,
) -> tuple[list[HAProxyLocation], HAProxyLocation | None]:
    """Build the HAProxy locations of one server.

    On ingress, the root location '/' means "any other URL". HAProxy
    matches ACLs in order, so the root location gets a negated match
    over every other path of the server:

        /api     ->  { path_beg /api }
        /static  ->  { path_beg /static }
        /        -> !{ path_beg /api /static }

    With no other paths the root location has no match expression and
    matches unconditionally.

    Returns:
        (locations, root_location): every location in input order, and
        the root location (also present in the list) or None.
    """
    locations: list[HAProxyLocation] = []
    root_location: HAProxyLocation | None = None
    other_paths: list[str] = []

    for location in server.locations:
        ha_location = HAProxyLocation(
            is_root_location=location.path == ROOT_PATH,
            path=location.path,
            backend=location.backend,
            redirect=location.redirect,
            userlist=userlists.get(location.basic_digest_auth.file, Userlist()),
            ha_whitelist=whitelist_expression(location),
        )
        if ha_location.is_root_location:
            root_location = ha_location
        else:
            if location.path not in other_paths:
                other_paths.append(location.path)
            ha_location.ha_match_path = f" {{ path_beg {location.path} }}"
        locations.append(ha_location)

    if root_location is not None and other_paths:
        root_location.ha_match_path = f" !{{ path_beg {' '.join(other_paths)} }}"

    return locations, root_location
