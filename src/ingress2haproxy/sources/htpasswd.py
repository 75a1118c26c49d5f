"""htpasswd-style credential file parser.

One user per line:

    alice:$apr1$...     password already hashed (encrypted)
    bob::secret         plain password, rendered as insecure-password

Parsing stops at the first malformed line; users read before it are
kept so a single bad entry does not lock everybody out.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ingress2haproxy.errors import CredentialFileError
from ingress2haproxy.models.haproxy import AuthUser

logger = logging.getLogger(__name__)


def parse_users(text: str, list_name: str) -> list[AuthUser]:
    """Parse credential file content into AuthUser entries.

    Args:
        text: Full content of the credential file.
        list_name: Userlist name, used in warnings only.

    Returns:
        Users in file order, up to the first malformed line.
    """
    users: list[AuthUser] = []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        line = line.removesuffix("\r")
        sep = line.find(":")
        if sep == -1:
            logger.warning("Missing ':' on userlist '%s'", list_name)
            break
        username = line[:sep]
        if not username:
            logger.warning("Missing username on userlist '%s'", list_name)
            break
        if sep == len(line) - 1 or line[sep:] == "::":
            logger.warning(
                "Missing '%s' password on userlist '%s'", username, list_name
            )
            break
        if line[sep + 1] == ":":
            users.append(
                AuthUser(username=username, password=line[sep + 2:], encrypted=False)
            )
        else:
            users.append(
                AuthUser(username=username, password=line[sep + 1:], encrypted=True)
            )
    return users


def read_users(file_name: str, list_name: str) -> list[AuthUser]:
    """Read and parse a credential file.

    Raises:
        CredentialFileError: If the file cannot be opened or read.
    """
    try:
        text = Path(file_name).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialFileError(file_name, str(e)) from e
    return parse_users(text, list_name)
