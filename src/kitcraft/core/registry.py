"""Installed kit registry.

Kits live under <root>/kits/<name>/, each with a metadata.yaml and a
templates/ directory. Updates stage a backup under <root>/cache/ so that a
failed re-acquisition or validation restores the previous content.
"""

import logging
import re
import shutil
from pathlib import Path
from urllib.parse import urlparse

from kitcraft.core.acquisition import ARCHIVE_SUFFIX, KitAcquirer
from kitcraft.errors import (
    AlreadyExistsError,
    NameExtractionError,
    NotFoundError,
    ValidationError,
)
from kitcraft.integrations.time.abc import Time
from kitcraft.io.metadata import METADATA_FILENAME, load_kit_metadata
from kitcraft.models import Kit, RegistryConfig

logger = logging.getLogger(__name__)

TEMPLATES_DIRNAME = "templates"

_SCP_LIKE_REMOTE = re.compile(r"^[\w.-]+@[\w.-]+:(?P<path>.+)$")


def extract_kit_name(source: str) -> str:
    """Derive a registry name from a source reference.

    Uses the last non-empty path segment with a trailing .git or .tar.gz
    removed, so `https://github.com/acme/go-api.git`,
    `git@github.com:acme/go-api.git`, `/kits/go-api/` and
    `https://example.com/go-api.tar.gz` all become `go-api`.

    Raises:
        NameExtractionError: If no usable segment remains
    """
    reference = source.strip()
    parsed = urlparse(reference)
    scp_match = _SCP_LIKE_REMOTE.match(reference)

    if parsed.scheme and (parsed.netloc or parsed.scheme == "file"):
        path = parsed.path
    elif scp_match is not None:
        path = scp_match.group("path")
    else:
        path = reference

    segments = [segment for segment in re.split(r"[/\\]", path) if segment]
    if not segments:
        raise NameExtractionError(source)

    name = segments[-1]
    for suffix in (".git", ARCHIVE_SUFFIX):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break

    if name in ("", ".", "..", "~"):
        raise NameExtractionError(source)
    return name


class KitRegistry:
    """Add, remove, update, list and validate installed kits."""

    def __init__(self, config: RegistryConfig, acquirer: KitAcquirer, time: Time) -> None:
        self._config = config
        self._acquirer = acquirer
        self._time = time
        config.kits_path.mkdir(parents=True, exist_ok=True)
        config.cache_path.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def kit_path(self, name: str) -> Path:
        """Directory an installed kit of this name occupies."""
        return self._config.kits_path / name

    def exists(self, name: str) -> bool:
        return self.kit_path(name).is_dir()

    def add(self, source: str) -> Kit:
        """Install a kit from a local path, git remote or .tar.gz URL.

        Args:
            source: Source reference; its last path segment names the kit

        Returns:
            The installed kit

        Raises:
            NameExtractionError: If no kit name can be derived from source
            AlreadyExistsError: If a kit with that name is installed
            AcquisitionError: If fetching the content fails
            ValidationError: If the fetched content is not a valid kit
        """
        name = extract_kit_name(source)
        kit_path = self.kit_path(name)
        if kit_path.exists():
            raise AlreadyExistsError(
                kit_path, f"Kit '{name}' already exists. Use update to refresh it"
            )

        logger.info("Adding kit '%s' from %s", name, source)
        self._acquirer.acquire(source, kit_path)

        try:
            self.validate(kit_path)
        except ValidationError:
            shutil.rmtree(kit_path, ignore_errors=True)
            raise

        logger.info("Kit '%s' added", name)
        return load_kit_metadata(kit_path)

    def remove(self, name: str) -> None:
        """Delete an installed kit.

        Raises:
            NotFoundError: If no kit of that name is installed
        """
        kit_path = self.kit_path(name)
        if not kit_path.exists():
            raise NotFoundError("kit", name)

        shutil.rmtree(kit_path)
        logger.info("Kit '%s' removed", name)

    def list_kits(self) -> list[Kit]:
        """Load every installed kit, skipping those whose metadata is unusable."""
        kits: list[Kit] = []
        for entry in sorted(self._config.kits_path.iterdir()):
            if not entry.is_dir():
                continue
            try:
                kits.append(load_kit_metadata(entry))
            except ValidationError as e:
                logger.warning("Failed to load kit metadata for '%s': %s", entry.name, e)
        return kits

    def get(self, name: str) -> Kit:
        """Load an installed kit.

        Raises:
            NotFoundError: If no kit of that name is installed
            ValidationError: If its metadata cannot be loaded
        """
        kit_path = self.kit_path(name)
        if not kit_path.is_dir():
            raise NotFoundError("kit", name)
        return load_kit_metadata(kit_path)

    def update(self, name: str) -> Kit:
        """Re-acquire a kit from its repository, restoring it on failure.

        The current content is copied to a backup first. If re-acquisition or
        validation fails, the kit directory is restored from that backup and
        the error propagates; the kit is never left half-replaced.

        Raises:
            NotFoundError: If no kit of that name is installed
            ValidationError: If the kit declares no repository, or the
                updated content is not a valid kit
            AcquisitionError: If fetching the updated content fails
        """
        kit = self.get(name)
        if not kit.repository:
            raise ValidationError(f"Kit '{name}' has no repository URL configured")

        kit_path = self.kit_path(name)
        backup_path = self._backup_path(name)
        logger.info("Backing up kit '%s' to %s", name, backup_path)
        shutil.copytree(kit_path, backup_path, symlinks=True)

        try:
            shutil.rmtree(kit_path)
            self._acquirer.acquire(kit.repository, kit_path)
            self.validate(kit_path)
        except Exception:
            logger.warning("Update of kit '%s' failed, restoring from backup", name)
            self._restore(backup_path, kit_path)
            raise

        shutil.rmtree(backup_path, ignore_errors=True)
        logger.info("Kit '%s' updated", name)
        return load_kit_metadata(kit_path)

    def validate(self, kit_path: Path) -> None:
        """Check that a directory is a usable kit.

        A kit needs a metadata.yaml with non-empty name and description and a
        templates/ directory.

        Raises:
            ValidationError: Describing the first problem found
        """
        if not (kit_path / METADATA_FILENAME).is_file():
            raise ValidationError(f"{METADATA_FILENAME} not found in kit: {kit_path}")

        load_kit_metadata(kit_path)

        if not (kit_path / TEMPLATES_DIRNAME).is_dir():
            raise ValidationError(f"{TEMPLATES_DIRNAME} directory not found in kit: {kit_path}")

    def _backup_path(self, name: str) -> Path:
        stamp = int(self._time.now().timestamp())
        candidate = self._config.cache_path / f"{name}_backup_{stamp}"
        counter = 1
        while candidate.exists():
            candidate = self._config.cache_path / f"{name}_backup_{stamp}_{counter}"
            counter += 1
        return candidate

    def _restore(self, backup_path: Path, kit_path: Path) -> None:
        try:
            if kit_path.exists():
                shutil.rmtree(kit_path)
            shutil.copytree(backup_path, kit_path, symlinks=True)
        except OSError as e:
            logger.error(
                "Failed to restore %s from backup (backup kept at %s): %s",
                kit_path,
                backup_path,
                e,
            )
            return
        shutil.rmtree(backup_path, ignore_errors=True)
