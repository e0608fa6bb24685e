from kitcraft.integrations.archive.abc import ArchiveFetcher
from kitcraft.integrations.archive.fake import FakeArchiveFetcher
from kitcraft.integrations.archive.real import RealArchiveFetcher

__all__ = ["ArchiveFetcher", "FakeArchiveFetcher", "RealArchiveFetcher"]
