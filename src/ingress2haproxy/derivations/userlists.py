"""Credential store: one HAProxy userlist per basic auth file.

Locations across all servers may point at the same credential file.
Each file is read once per pass and every location referencing it gets
the same Userlist instance.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ingress2haproxy.errors import CredentialFileError
from ingress2haproxy.models.haproxy import Userlist
from ingress2haproxy.models.ingress import Server
from ingress2haproxy.sources.htpasswd import read_users

logger = logging.getLogger(__name__)


def userlist_name(file_name: str) -> str:
    """Derive the userlist name from a credential file path.

    The base name with its extension removed. A base name without an
    extension (or a dotfile) is used as is.

    >>> userlist_name("/var/lib/ingress/auth/default-web.passwd")
    'default-web'
    >>> userlist_name("/etc/haproxy/users")
    'users'
    """
    base = file_name[file_name.rfind("/") + 1:]
    dot = base.rfind(".")
    return base[:dot] if dot > 0 else base


def build_userlists(servers: Sequence[Server]) -> dict[str, Userlist]:
    """Read every basic auth file referenced by the servers' locations.

    Digest auth is not supported by HAProxy userlists; such locations
    are skipped. When a file cannot be read the error is logged and the
    remaining locations of that server are not inspected; other servers
    are still processed.

    Returns:
        Mapping of credential file path to Userlist.
    """
    userlists: dict[str, Userlist] = {}
    for server in servers:
        for location in server.locations:
            auth = location.basic_digest_auth
            if not auth.file or auth.type == "digest":
                continue
            if auth.file in userlists:
                continue
            list_name = userlist_name(auth.file)
            try:
                users = read_users(auth.file, list_name)
            except CredentialFileError as e:
                logger.error("Unexpected error reading %s: %s", list_name, e)
                break
            userlists[auth.file] = Userlist(
                list_name=list_name,
                realm=auth.realm,
                users=tuple(users),
            )
    return userlists
