"""BucketView — object-storage key listing served as a folder tree."""

__version__ = "0.1.0"
