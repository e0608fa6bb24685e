"""Application context with dependency injection.

KitcraftContext holds every dependency of the engine. It is created once at
the CLI entry point, carried in click's context object, and built from fakes
in tests via KitcraftContext.for_test().
"""

from dataclasses import dataclass
from pathlib import Path

from kitcraft.core.acquisition import KitAcquirer
from kitcraft.core.generator import TreeGenerator
from kitcraft.core.project import ProjectService
from kitcraft.core.registry import KitRegistry
from kitcraft.integrations.archive.abc import ArchiveFetcher
from kitcraft.integrations.archive.real import RealArchiveFetcher
from kitcraft.integrations.git.abc import KitGit
from kitcraft.integrations.git.real import RealKitGit
from kitcraft.integrations.script_runner.abc import ScriptRunner
from kitcraft.integrations.script_runner.real import RealScriptRunner
from kitcraft.integrations.time.abc import Time
from kitcraft.integrations.time.real import RealTime
from kitcraft.models import RegistryConfig


@dataclass(frozen=True)
class KitcraftContext:
    """Immutable context holding all dependencies for kitcraft operations.

    Attributes:
        config: Registry locations and command timeout
        registry: Installed kit registry
        projects: Project generation service
        script_runner: Runner used for post-generation scripts
        time: Clock used for backups and date placeholders
        debug: Whether debug logging is enabled
    """

    config: RegistryConfig
    registry: KitRegistry
    projects: ProjectService
    script_runner: ScriptRunner
    time: Time
    debug: bool

    @staticmethod
    def build(
        config: RegistryConfig,
        *,
        git: KitGit,
        fetcher: ArchiveFetcher,
        script_runner: ScriptRunner,
        time: Time,
        debug: bool = False,
    ) -> "KitcraftContext":
        """Wire the engine from explicit integration implementations."""
        registry = KitRegistry(config, KitAcquirer(git, fetcher), time)
        projects = ProjectService(registry, TreeGenerator(script_runner), time)
        return KitcraftContext(
            config=config,
            registry=registry,
            projects=projects,
            script_runner=script_runner,
            time=time,
            debug=debug,
        )

    @staticmethod
    def for_test(
        root: Path,
        *,
        git: KitGit | None = None,
        fetcher: ArchiveFetcher | None = None,
        script_runner: ScriptRunner | None = None,
        time: Time | None = None,
        debug: bool = False,
    ) -> "KitcraftContext":
        """Create a test context rooted at a temporary directory.

        Uses fakes for every integration that is not provided, so no
        subprocess or network call is ever made.

        Example:
            >>> from kitcraft.integrations.git.fake import FakeKitGit
            >>> ctx = KitcraftContext.for_test(tmp_path, git=FakeKitGit())
        """
        from kitcraft.integrations.archive.fake import FakeArchiveFetcher
        from kitcraft.integrations.git.fake import FakeKitGit
        from kitcraft.integrations.script_runner.fake import FakeScriptRunner
        from kitcraft.integrations.time.fake import FakeTime

        return KitcraftContext.build(
            RegistryConfig.for_root(root),
            git=git if git is not None else FakeKitGit(),
            fetcher=fetcher if fetcher is not None else FakeArchiveFetcher(),
            script_runner=script_runner if script_runner is not None else FakeScriptRunner(),
            time=time if time is not None else FakeTime(),
            debug=debug,
        )


def create_context(config: RegistryConfig, *, debug: bool = False) -> KitcraftContext:
    """Create the production context with real integrations."""
    timeout = config.command_timeout_seconds
    return KitcraftContext.build(
        config,
        git=RealKitGit(timeout_seconds=timeout),
        fetcher=RealArchiveFetcher(timeout_seconds=timeout),
        script_runner=RealScriptRunner(timeout_seconds=timeout),
        time=RealTime(),
        debug=debug,
    )
