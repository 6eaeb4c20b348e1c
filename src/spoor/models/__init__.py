"""Data models."""

from spoor.models.book import (
    BookMetadata,
    CompiledBook,
    DatedEvent,
    DateEvent,
    EpubSummary,
    Identifier,
    MetadataBlock,
    NavMap,
    NavNode,
    Person,
    ResourceDescriptor,
    TOCEntry,
)
from spoor.models.tree import Element, ParsedNode, Text

__all__ = [
    # Parse tree
    "Element",
    "Text",
    "ParsedNode",
    # Book models
    "BookMetadata",
    "Person",
    "DateEvent",
    "DatedEvent",
    "Identifier",
    "ResourceDescriptor",
    "NavNode",
    "NavMap",
    "MetadataBlock",
    "CompiledBook",
    # EPUB inspection
    "TOCEntry",
    "EpubSummary",
]
