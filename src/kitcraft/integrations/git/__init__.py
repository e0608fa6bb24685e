from kitcraft.integrations.git.abc import KitGit
from kitcraft.integrations.git.fake import FakeKitGit
from kitcraft.integrations.git.real import RealKitGit

__all__ = ["FakeKitGit", "KitGit", "RealKitGit"]
