from .tree import TreeSource, EmbeddedSource, LocalDirSource
from .memory import MemorySource

__all__ = ["TreeSource", "EmbeddedSource", "LocalDirSource", "MemorySource"]
