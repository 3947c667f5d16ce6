"""Removal of a deployed container and its workspace artifacts."""

from __future__ import annotations

import os
import shutil
from typing import Protocol

INTERNAL_NETWORK_NAME = "switchblade-internal"


class ContainerNotFoundError(Exception):
    """Raised by a container client when the container does not exist."""


class TeardownError(Exception):
    """Raised when a teardown step fails."""


class _ContainerClient(Protocol):
    def container_remove(self, container_id: str, force: bool) -> None: ...


class _NetworkManager(Protocol):
    def delete(self, name: str) -> None: ...


def _remove_file(path: str, what: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as err:
        raise TeardownError(f"failed to delete {what} tarball: {err}") from err


class Teardown:
    """Stops an application's container and deletes what it left behind."""

    def __init__(self, client: _ContainerClient, networks: _NetworkManager, workspace: str):
        self.client = client
        self.networks = networks
        self.workspace = workspace

    def run(self, name: str) -> None:
        """Remove the container ``name``, the internal network and its artifacts."""
        try:
            self.client.container_remove(name, force=True)
        except ContainerNotFoundError:
            pass
        except Exception as err:
            raise TeardownError(f"failed to remove container: {err}") from err

        try:
            self.networks.delete(INTERNAL_NETWORK_NAME)
        except Exception as err:
            raise TeardownError(f"failed to delete network: {err}") from err

        tarball = f"{name}.tar.gz"
        _remove_file(os.path.join(self.workspace, "droplets", tarball), "droplet")
        _remove_file(os.path.join(self.workspace, "source", tarball), "source")
        _remove_file(os.path.join(self.workspace, "buildpacks", tarball), "buildpack")

        try:
            shutil.rmtree(os.path.join(self.workspace, "buildpacks", name))
        except FileNotFoundError:
            pass
        except OSError as err:
            raise TeardownError(f"failed to delete buildpacks: {err}") from err

        _remove_file(os.path.join(self.workspace, "build-cache", tarball), "build-cache")