"""Data models for book metadata, resources and navigation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DateEvent(str, Enum):
    """Publication events a ``<date>`` element may describe.

    Declaration order is the order the dates appear in the OPF metadata.
    """

    CREATION = "creation"
    PUBLICATION = "publication"
    MODIFICATION = "modification"


class Person(BaseModel):
    """A creator or contributor."""

    model_config = ConfigDict(frozen=True)

    name: str
    sort: str | None = None
    role: str | None = None  # lowercase relator code


class DatedEvent(BaseModel):
    """A dated publication event."""

    model_config = ConfigDict(frozen=True)

    event: DateEvent
    value: str


class Identifier(BaseModel):
    """The unique identifier of the book."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    value: str


class BookMetadata(BaseModel):
    """Validated book-level metadata."""

    model_config = ConfigDict(frozen=True)

    title: str
    identifier: Identifier
    language: str
    creators: list[Person] = Field(default_factory=list)
    description: str | None = None
    publisher: str | None = None
    contributors: list[Person] = Field(default_factory=list)
    dates: list[DatedEvent] = Field(default_factory=list)
    rights: str | None = None

    def date_for(self, event: DateEvent) -> DatedEvent | None:
        for dated in self.dates:
            if dated.event is event:
                return dated
        return None


class ResourceDescriptor(BaseModel):
    """A style sheet or image embedded in the book."""

    model_config = ConfigDict(frozen=True)

    path: str
    filename: str
    extension: str  # lowercase, without the dot

    @property
    def stem(self) -> str:
        return self.filename.rsplit(".", 1)[0]


class NavNode(BaseModel):
    """A compiled navigation point."""

    model_config = ConfigDict(frozen=True)

    name: str
    target: str  # as written in the source, "#" or "#fragment"
    src: str  # target resolved against the content document
    language: str
    play_order: int
    children: list["NavNode"] = Field(default_factory=list)

    @property
    def element_id(self) -> str:
        return f"navp{self.play_order}"


class NavMap(BaseModel):
    """Result of compiling the ``<nav>`` section."""

    model_config = ConfigDict(frozen=True)

    xml: str
    points: list[NavNode]
    depth: int
    count: int


class MetadataBlock(BaseModel):
    """Result of compiling the ``<metadata>`` section."""

    model_config = ConfigDict(frozen=True)

    xml: str
    metadata: BookMetadata

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def identifier(self) -> str:
        return self.metadata.identifier.value


class CompiledBook(BaseModel):
    """Both generated documents plus what was learned compiling them."""

    model_config = ConfigDict(frozen=True)

    opf: str
    ncx: str
    metadata: BookMetadata
    navigation: list[NavNode]
    nav_depth: int
    nav_count: int
    resources: list[ResourceDescriptor] = Field(default_factory=list)
    cover: ResourceDescriptor | None = None


class TOCEntry(BaseModel):
    """Single entry in the table of contents of an existing EPUB."""

    id: str
    title: str
    href: str
    level: int = 0
    children: list["TOCEntry"] = Field(default_factory=list)


class EpubSummary(BaseModel):
    """What ``spoor info`` reports about an EPUB file."""

    title: str
    identifier: str | None = None
    language: str | None = None
    creators: list[str] = Field(default_factory=list)
    publisher: str | None = None
    toc: list[TOCEntry] = Field(default_factory=list)
    items: list[tuple[str, str]] = Field(default_factory=list)  # (href, media type)
    spine_order: list[str] = Field(default_factory=list)
