# -*- coding: utf-8 -*-
"""Reads JSON documents from, and writes converted files to, file trees.

A file tree is a directory or a ZIP file. Inputs are read through a
``Reader``, and converted files are written through a ``Writer``.
"""

# pylint: disable=too-few-public-methods

import contextlib
import enum
import io
import logging
import os
import pathlib
import shutil
import tempfile
from typing import IO, Iterator, Protocol, Self
import zipfile

_LOG = logging.getLogger(__name__)

_ENCODING = "utf-8"
_NEWLINE = "\n"
JSON_SUFFIX = ".json"


class Error(Exception):
    """Base exception emitted by filesio."""


class NotFoundError(Error):
    """Attempted to read a file tree or file that does not exist."""


class IOType(enum.StrEnum):
    """Kinds of file tree that can be opened with a filesystem path."""

    # Resolution needed:
    AUTO = "AUTO"
    # Concrete values:
    DIR = "DIR"
    ZIP = "ZIP"

    def new_reader(
        self,
        path: pathlib.Path,
    ) -> contextlib.AbstractContextManager["Reader"]:
        """Opens the file tree at ``path`` for reading.

        :raises Error: If ``self`` is unresolved ``AUTO``.
        """
        match self:
            case IOType.DIR:
                return DirReader.new_reader(path)
            case IOType.ZIP:
                return ZipReader.new_reader(path)
            case _:
                raise Error(f"cannot open file tree type {self} with a path")

    def new_writer(
        self,
        path: pathlib.Path,
    ) -> contextlib.AbstractContextManager["Writer"]:
        """Opens the file tree at ``path`` for writing, creating it if needed.

        :raises Error: If ``self`` is unresolved ``AUTO``.
        """
        match self:
            case IOType.DIR:
                return DirWriter.new_writer(path)
            case IOType.ZIP:
                return ZipWriter.new_writer(path)
            case _:
                raise Error(f"cannot open file tree type {self} with a path")

    def resolve_auto(self, path: pathlib.Path) -> "IOType":
        """Returns a concrete IOType for the given filesystem ``path``.

        Existing files and paths ending in ``.zip`` are ZIP files, anything
        else is a directory.

        :param path: Filesystem path to aid resolution.
        :return: If ``self`` is ``AUTO``, then a concrete value, otherwise
        ``self``.
        """
        if self != IOType.AUTO:
            return self
        if path.exists():
            return IOType.ZIP if path.is_file() else IOType.DIR
        return IOType.ZIP if path.suffix == ".zip" else IOType.DIR


class Reader(Protocol):
    """Protocol for reading files from a tree."""

    def open_read(self, path: pathlib.PurePath) -> contextlib.AbstractContextManager[IO[str]]:
        """Opens a text file for reading.

        :raises NotFoundError: If the ``path`` does not exist.
        """
        ...

    def iter_files(self) -> Iterator[pathlib.PurePath]:
        """Iterates over the paths of all files in the tree, in no particular order."""
        ...


class Writer(Protocol):
    """Protocol for writing files into a tree."""

    def open_write(self, path: pathlib.PurePath) -> contextlib.AbstractContextManager[IO[str]]:
        """Opens a text file for writing, replacing any existing file."""
        ...


def read_json_documents(reader: Reader) -> Iterator[tuple[str, str]]:
    """Reads the JSON files of a tree.

    :param reader: Tree to read.
    :yield: Pairs of POSIX path and text of files ending in ``.json``, ordered
    by path.
    """
    paths = sorted(
        (p for p in reader.iter_files() if p.suffix.lower() == JSON_SUFFIX),
        key=lambda p: p.as_posix(),
    )
    for path in paths:
        _LOG.debug("reading %s", path)
        with reader.open_read(path) as f:
            yield path.as_posix(), f.read()


class DirReader:
    """Reads files in a local filesystem directory."""

    _dir_path: pathlib.Path

    def __init__(self, dir_path: pathlib.Path) -> None:
        self._dir_path = dir_path

    @classmethod
    @contextlib.contextmanager
    def new_reader(cls, dir_path: pathlib.Path) -> Iterator[Self]:
        """Creates a DirReader to read in the given directory.

        :raises NotFoundError: If ``dir_path`` is not a directory.
        """
        if not dir_path.is_dir():
            raise NotFoundError(dir_path)
        yield cls(dir_path)

    def open_read(self, path: pathlib.PurePath) -> contextlib.AbstractContextManager[IO[str]]:
        """Implements Reader.open_read."""
        try:
            return (self._dir_path / path).open("rt", encoding=_ENCODING, newline=_NEWLINE)
        except FileNotFoundError as exc:
            raise NotFoundError(path) from exc

    def iter_files(self) -> Iterator[pathlib.PurePath]:
        """Implements Reader.iter_files."""
        for root, _, files in os.walk(self._dir_path):
            for filename in files:
                yield (pathlib.PurePath(root) / filename).relative_to(self._dir_path)


class DirWriter:
    """Writes files into a local filesystem directory."""

    _dir_path: pathlib.Path
    _created_dirs: set[pathlib.Path]

    def __init__(self, dir_path: pathlib.Path) -> None:
        self._dir_path = dir_path
        self._created_dirs = set()

    @classmethod
    @contextlib.contextmanager
    def new_writer(cls, dir_path: pathlib.Path) -> Iterator[Self]:
        """Creates a DirWriter for the given directory, creating it if needed."""
        dir_path.mkdir(parents=True, exist_ok=True)
        yield cls(dir_path)

    def open_write(self, path: pathlib.PurePath) -> contextlib.AbstractContextManager[IO[str]]:
        """Implements Writer.open_write."""
        full_path = self._dir_path / path
        if full_path.parent not in self._created_dirs:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            self._created_dirs.add(full_path.parent)
        return full_path.open("wt", encoding=_ENCODING, newline=_NEWLINE)


class ZipReader:
    """Reads files from a ZIP file."""

    _zip_file: zipfile.ZipFile

    def __init__(self, zip_file: zipfile.ZipFile) -> None:
        self._zip_file = zip_file

    @classmethod
    @contextlib.contextmanager
    def new_reader(cls, zip_path: pathlib.Path) -> Iterator[Self]:
        """Creates a ZipReader to read the ZIP file at the path.

        :raises NotFoundError: If ``zip_path`` does not exist.
        :raises Error: If ``zip_path`` is not a ZIP file.
        """
        try:
            zip_file = zipfile.ZipFile(zip_path, "r")
        except FileNotFoundError as exc:
            raise NotFoundError(zip_path) from exc
        except zipfile.BadZipFile as exc:
            raise Error(f"{zip_path}: {exc}") from exc
        with zip_file:
            yield cls(zip_file)

    @contextlib.contextmanager
    def open_read(self, path: pathlib.PurePath) -> Iterator[IO[str]]:
        """Implements Reader.open_read."""
        try:
            f = self._zip_file.open(path.as_posix(), "r")
        except KeyError as exc:
            raise NotFoundError(path) from exc
        with io.TextIOWrapper(f, encoding=_ENCODING, newline=_NEWLINE) as r:
            yield r

    def iter_files(self) -> Iterator[pathlib.PurePath]:
        """Implements Reader.iter_files."""
        for info in self._zip_file.infolist():
            if not info.is_dir():
                yield pathlib.PurePosixPath(info.filename)


class ZipWriter:
    """Writes files into a ZIP file.

    Written files are staged in a temporary directory. When the context exits
    the ZIP file is replaced by one holding the staged files, plus any files
    of the existing ZIP file that were not written again.
    """

    _staging: DirWriter

    def __init__(self, staging: DirWriter) -> None:
        self._staging = staging

    @classmethod
    @contextlib.contextmanager
    def new_writer(cls, zip_path: pathlib.Path) -> Iterator[Self]:
        """Creates a ZipWriter to write to the ZIP file at the path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            staging_dir = pathlib.Path(tmpdir)
            with DirWriter.new_writer(staging_dir) as staging:
                yield cls(staging)

            with DirReader.new_reader(staging_dir) as staged:
                staged_paths = {p.as_posix(): p for p in staged.iter_files()}
                if not staged_paths:
                    # Nothing written, so any existing ZIP file stays as-is.
                    return
                zip_path.parent.mkdir(parents=True, exist_ok=True)
                new_zip_path = _build_zip(staged, staged_paths, zip_path)

        shutil.move(new_zip_path, zip_path)

    def open_write(self, path: pathlib.PurePath) -> contextlib.AbstractContextManager[IO[str]]:
        """Implements Writer.open_write."""
        return self._staging.open_write(path)


def _build_zip(
    staged: DirReader,
    staged_paths: dict[str, pathlib.PurePath],
    zip_path: pathlib.Path,
) -> pathlib.Path:
    # The new file is created next to the old one, and moved over it once
    # complete.
    zf_fd, zf_path_str = tempfile.mkstemp(suffix=".zip", dir=zip_path.parent)
    try:
        with (
            os.fdopen(zf_fd, mode="wb") as zf,
            zipfile.ZipFile(zf, mode="w", compression=zipfile.ZIP_DEFLATED) as zw,
        ):
            _copy_entries(staged, staged_paths, zip_path, zw)
    except BaseException:
        os.unlink(zf_path_str)
        raise
    return pathlib.Path(zf_path_str)


def _copy_entries(
    staged: DirReader,
    staged_paths: dict[str, pathlib.PurePath],
    zip_path: pathlib.Path,
    zw: zipfile.ZipFile,
) -> None:
    for name in sorted(staged_paths):
        with staged.open_read(staged_paths[name]) as r:
            zw.writestr(name, r.read().encode(_ENCODING))
    if zip_path.is_file():
        try:
            old = zipfile.ZipFile(zip_path, "r")
        except zipfile.BadZipFile as exc:
            raise Error(f"{zip_path}: {exc}") from exc
        with old:
            for info in old.infolist():
                if not info.is_dir() and info.filename not in staged_paths:
                    _LOG.debug("keeping %s from %s", info.filename, zip_path)
                    zw.writestr(info, old.read(info))
