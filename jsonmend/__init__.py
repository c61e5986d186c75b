"""JSON Patch (RFC 6902), JSON Merge Patch (RFC 7396), JSON Pointer and document diffing."""

__version__ = "4.1.0"

__all__ = ["pointer", "operations", "apply", "diff"]