from kitcraft.integrations.time.abc import Time
from kitcraft.integrations.time.fake import FakeTime
from kitcraft.integrations.time.real import RealTime

__all__ = ["FakeTime", "RealTime", "Time"]
