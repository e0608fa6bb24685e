from kitcraft.io.metadata import METADATA_FILENAME, load_kit_metadata

__all__ = ["METADATA_FILENAME", "load_kit_metadata"]
