from kitcraft.models.config import RegistryConfig
from kitcraft.models.kit import GenerationRequest, GenerationResult, Kit, PlaceholderValue

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "Kit",
    "PlaceholderValue",
    "RegistryConfig",
]
