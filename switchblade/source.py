"""Preparation of application source directories."""

import os
import secrets
import shutil
import tempfile

KEY_FILE = ".switchblade-key"
_KEY_SIZE = 32


def source(path: str) -> str:
    """Copy ``path`` into a fresh temporary directory and add a random key file.

    The key file makes every copy unique. Returns the new directory.
    """
    destination = tempfile.mkdtemp(prefix="source")
    try:
        shutil.copytree(
            path,
            destination,
            symlinks=True,
            dirs_exist_ok=True,
            copy_function=shutil.copy2,
        )
        key_path = os.path.join(destination, KEY_FILE)
        fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as key_file:
            key_file.write(secrets.token_bytes(_KEY_SIZE))
    except BaseException:
        shutil.rmtree(destination, ignore_errors=True)
        raise
    return destination