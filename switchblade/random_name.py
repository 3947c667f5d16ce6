"""Random application names for deployments."""

import secrets
import string

_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase + "_-"
_ID_LENGTH = 9
_PREFIX = "switchblade-"


def random_name() -> str:
    """Return a lower-case name of the form ``switchblade-<9 random characters>``."""
    identifier = "".join(secrets.choice(_ALPHABET) for _ in range(_ID_LENGTH))
    return f"{_PREFIX}{identifier}".lower()