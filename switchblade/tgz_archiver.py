"""Gzipped tarball creation with ownership set for the container user."""

from __future__ import annotations

import dataclasses
import os
import posixpath
import stat
import tarfile
from collections.abc import Iterator
from typing import BinaryIO

_UID = 2000
_GID = 2000
_USER = "vcap"


def _join(prefix: str, rel: str) -> str:
    rel = rel.replace(os.sep, "/")
    if not prefix and not rel:
        return ""
    return posixpath.normpath(posixpath.join(prefix, rel) if prefix else rel)


def _set_owner(info: tarfile.TarInfo) -> None:
    info.uid = _UID
    info.gid = _GID
    info.uname = _USER
    info.gname = _USER


def _walk(root: str) -> Iterator[str]:
    """Yield ``root`` and everything below it in lexical order without following links."""
    yield root
    if stat.S_ISDIR(os.lstat(root).st_mode):
        for name in sorted(os.listdir(root)):
            yield from _walk(os.path.join(root, name))


@dataclasses.dataclass(frozen=True)
class TGZArchiver:
    """Writes directories or existing tarballs out as a gzipped tarball."""

    prefix: str = ""

    def with_prefix(self, prefix: str) -> TGZArchiver:
        """Return an archiver that puts every entry under ``prefix``."""
        return dataclasses.replace(self, prefix=prefix)

    def compress(self, input_path: str, output_path: str) -> None:
        """Archive ``input_path`` (a directory or a .tgz file) into ``output_path``."""
        try:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        except OSError as err:
            raise OSError(f"failed to create output directory: {err}") from err

        try:
            output = open(output_path, "wb")
        except OSError as err:
            raise OSError(f"failed to create output file: {err}") from err

        with output, tarfile.open(fileobj=output, mode="w:gz") as archive:
            info = os.stat(input_path)
            if stat.S_ISDIR(info.st_mode):
                self._from_directory(input_path, archive)
            elif stat.S_ISREG(info.st_mode):
                self._from_file(input_path, archive)
            else:
                raise ValueError("unknown file type")

    def _from_directory(self, input_path: str, archive: tarfile.TarFile) -> None:
        try:
            for path in _walk(input_path):
                self._add_path(input_path, path, archive)
        except OSError as err:
            raise OSError(f"failed to walk input path: {err}") from err

    def _add_path(self, input_path: str, path: str, archive: tarfile.TarFile) -> None:
        try:
            info = archive.gettarinfo(path)
        except OSError as err:
            raise OSError(f"failed to walk input path: {err}") from err

        if info.issym():
            try:
                link = os.readlink(path)
            except OSError as err:
                raise OSError(f"failed to read symlink: {err}") from err
            parent = os.path.dirname(path)
            if not link.startswith(os.sep):
                link = os.path.normpath(os.path.join(parent, link))
            info.linkname = os.path.relpath(link, parent).replace(os.sep, "/")

        info.name = _join(self.prefix, os.path.relpath(path, input_path))
        _set_owner(info)

        if info.isreg():
            try:
                handle = open(path, "rb")
            except OSError as err:
                raise OSError(f"failed to open file: {err}") from err
            with handle:
                self._write(archive, info, handle)
        else:
            self._write(archive, info, None)

    @staticmethod
    def _write(
        archive: tarfile.TarFile, info: tarfile.TarInfo, content: BinaryIO | None
    ) -> None:
        try:
            archive.addfile(info, content)
        except OSError as err:
            raise OSError(f"failed to copy file: {err}") from err

    def _from_file(self, input_path: str, archive: tarfile.TarFile) -> None:
        try:
            handle = open(input_path, "rb")
        except OSError as err:
            raise OSError(f"failed to open file: {err}") from err

        with handle:
            try:
                source = tarfile.open(fileobj=handle, mode="r:gz")
            except (tarfile.TarError, OSError, EOFError) as err:
                raise OSError(f"failed to read gzip file: {err}") from err

            with source:
                try:
                    members = list(source)
                except (tarfile.TarError, OSError, EOFError) as err:
                    raise OSError(f"failed to read tar header: {err}") from err

                for member in members:
                    member.name = _join(self.prefix, member.name)
                    _set_owner(member)
                    if member.isreg():
                        self._write(archive, member, source.extractfile(member))
                    else:
                        self._write(archive, member, None)