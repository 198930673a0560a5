from .settings import BlobCommitSettings, get_settings

__all__ = ["BlobCommitSettings", "get_settings"]
