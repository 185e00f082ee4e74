"""On-disk state for docdiff."""

from .versions import DocVersionStore, MetadataError, sorted_docs

__all__ = ["DocVersionStore", "MetadataError", "sorted_docs"]
