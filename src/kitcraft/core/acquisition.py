"""Fetch kit content from local, version-control and archive sources.

Sources are classified in a fixed order: a filesystem path is copied, an
http(s) URL ending in .tar.gz is streamed through gzip and tar extraction,
and anything that looks like a git remote is cloned (with its .git directory
removed afterwards). Whatever the source, a failed acquisition leaves
nothing behind at the destination.
"""

import logging
import re
import shutil
import stat
import tarfile
import zlib
from enum import Enum
from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlparse

from kitcraft.errors import AcquisitionError, AlreadyExistsError, UnsupportedSourceError
from kitcraft.integrations.archive.abc import ArchiveFetcher
from kitcraft.integrations.git.abc import KitGit

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"

_HTTP_SCHEMES = frozenset({"http", "https"})
_REPOSITORY_SCHEMES = frozenset({"http", "https", "ssh", "git", "git+ssh", "file"})
_SCP_LIKE_REMOTE = re.compile(r"^[\w.-]+@[\w.-]+:[^/].*$")
_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:[\\/]")


class SourceKind(Enum):
    """How a kit source is acquired."""

    LOCAL = "local"
    ARCHIVE = "archive"
    REPOSITORY = "repository"


def is_local_path(source: str) -> bool:
    """Check whether a source refers to the local filesystem."""
    if source.startswith(("/", "./", "../", "~/")):
        return True
    return _WINDOWS_DRIVE.match(source) is not None


def classify_source(source: str) -> SourceKind:
    """Decide how a source reference is acquired.

    Args:
        source: Local path, repository remote or archive URL

    Returns:
        The matching SourceKind

    Raises:
        UnsupportedSourceError: If the source matches no recognized form
    """
    if is_local_path(source):
        return SourceKind.LOCAL

    parsed = urlparse(source)
    scheme = parsed.scheme.lower()
    if scheme in _HTTP_SCHEMES and parsed.path.endswith(ARCHIVE_SUFFIX):
        return SourceKind.ARCHIVE
    if scheme in _REPOSITORY_SCHEMES and (parsed.netloc or scheme == "file"):
        return SourceKind.REPOSITORY
    if not scheme and _SCP_LIKE_REMOTE.match(source):
        return SourceKind.REPOSITORY

    raise UnsupportedSourceError(source, "expected a local path, git remote or .tar.gz URL")


def extract_tar_gz(stream: BinaryIO, destination: Path) -> None:
    """Extract a gzip-compressed tar stream into destination.

    Reads the stream sequentially. Only directories and regular files are
    recreated; links and device entries are skipped. Entries whose path
    resolves outside destination are rejected before anything is written
    for them.

    Args:
        stream: Readable binary stream of .tar.gz data
        destination: Directory to extract into (created if missing)

    Raises:
        AcquisitionError: If an entry would escape destination
        tarfile.TarError: If the stream is not a valid gzip tar archive
    """
    destination.mkdir(parents=True, exist_ok=True)
    root = destination.resolve()

    with tarfile.open(fileobj=stream, mode="r|gz") as archive:
        for member in archive:
            target = _member_target(root, member.name)
            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
            elif member.isfile():
                target.parent.mkdir(parents=True, exist_ok=True)
                content = archive.extractfile(member)
                if content is None:
                    continue
                with content, open(target, "wb") as out:
                    shutil.copyfileobj(content, out)
                target.chmod((member.mode & 0o777) | stat.S_IRUSR | stat.S_IWUSR)
            else:
                logger.debug("Skipping archive entry %s (type %r)", member.name, member.type)


def _member_target(root: Path, name: str) -> Path:
    if not name or name.startswith(("/", "\\")) or _WINDOWS_DRIVE.match(name):
        raise AcquisitionError(f"Archive entry has an absolute path: {name!r}")
    target = (root / name).resolve()
    if not target.is_relative_to(root):
        raise AcquisitionError(f"Archive entry escapes the destination directory: {name!r}")
    return target


def _remove_partial(destination: Path) -> None:
    if destination.exists():
        logger.debug("Removing partially acquired kit at %s", destination)
        shutil.rmtree(destination, ignore_errors=True)


class KitAcquirer:
    """Brings kit content from a source reference into a local directory."""

    def __init__(self, git: KitGit, fetcher: ArchiveFetcher) -> None:
        self._git = git
        self._fetcher = fetcher

    def acquire(self, source: str, destination: Path, kind: SourceKind | None = None) -> None:
        """Fetch kit content into a directory that does not exist yet.

        Args:
            source: Local path, repository remote or archive URL
            destination: Directory to create with the kit content
            kind: Explicit source type; classified from source when None

        Raises:
            AlreadyExistsError: If destination already exists
            UnsupportedSourceError: If source matches no recognized form
            AcquisitionError: If copying, cloning or downloading fails
        """
        if destination.exists():
            raise AlreadyExistsError(destination)

        resolved_kind = kind if kind is not None else classify_source(source)
        destination.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Acquiring %s source %s into %s", resolved_kind.value, source, destination)

        try:
            if resolved_kind is SourceKind.LOCAL:
                self._copy_local(source, destination)
            elif resolved_kind is SourceKind.ARCHIVE:
                self._download_archive(source, destination)
            else:
                self._clone(source, destination)
        except Exception:
            _remove_partial(destination)
            raise

    def _copy_local(self, source: str, destination: Path) -> None:
        source_path = Path(source).expanduser()
        if not source_path.is_dir():
            raise AcquisitionError(f"Source path does not exist or is not a directory: {source}")
        try:
            shutil.copytree(source_path, destination, symlinks=True)
        except OSError as e:
            raise AcquisitionError(f"Failed to copy kit from {source}: {e}") from e

    def _clone(self, source: str, destination: Path) -> None:
        try:
            self._git.clone(source, destination)
        except RuntimeError as e:
            message = str(e)
            if urlparse(source).scheme.lower() in _HTTP_SCHEMES:
                message += f"\nOnly {ARCHIVE_SUFFIX} archives are supported for HTTP download."
            raise AcquisitionError(message) from e

        git_dir = destination / ".git"
        if git_dir.exists():
            shutil.rmtree(git_dir)

    def _download_archive(self, source: str, destination: Path) -> None:
        try:
            with self._fetcher.open(source) as stream:
                extract_tar_gz(stream, destination)
        except AcquisitionError:
            raise
        except (RuntimeError, tarfile.TarError, OSError, EOFError, zlib.error) as e:
            raise AcquisitionError(f"Failed to extract archive {source}: {e}") from e
