"""Compile the ``<metadata>`` section into the OPF metadata block."""

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from spoor.config import DEFAULT_LAYOUT, EpubLayout
from spoor.core.escape import escape_attr, escape_text
from spoor.core.validators import valid_date, valid_language_code, valid_role
from spoor.errors import FormatError, SchemaError
from spoor.models.book import (
    BookMetadata,
    DatedEvent,
    DateEvent,
    Identifier,
    MetadataBlock,
    Person,
)
from spoor.models.tree import Element, ParsedNode

log = logging.getLogger(__name__)

DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
OPF_NAMESPACE = "http://www.idpf.org/2007/opf"

SINGLETON_TAGS = ("title", "description", "publisher", "identifier", "rights")
REQUIRED_TAGS = ("title", "identifier")


# =============================================================================
# Typed records, one per recognized element
# =============================================================================


@dataclass(frozen=True)
class TitleEntry:
    text: str


@dataclass(frozen=True)
class PersonEntry:
    person: Person


@dataclass(frozen=True)
class TextEntry:
    text: str


@dataclass(frozen=True)
class PublisherEntry:
    name: str


@dataclass(frozen=True)
class DateEntry:
    dated: DatedEvent


@dataclass(frozen=True)
class IdentifierEntry:
    identifier: Identifier


MetadataEntry = TitleEntry | PersonEntry | TextEntry | PublisherEntry | DateEntry | IdentifierEntry


def require_attr(element: Element, attr: str) -> str:
    """Return a required attribute of an element.

    Raises:
        SchemaError: If the attribute is absent
    """
    if attr not in element.attributes:
        raise SchemaError(
            f"<{element.name}> element is missing required '{attr}' attribute",
            element=element.name,
        )
    return element.attributes[attr]


def plain_text(element: Element) -> str:
    """Text content of an element that must not contain child elements."""
    if element.elements():
        raise SchemaError(
            f"<{element.name}> element must contain plain text only",
            element=element.name,
        )
    return element.text().strip()


def _parse_person(element: Element) -> PersonEntry:
    name = require_attr(element, "name")
    role = element.attributes.get("role")
    if role is not None and not valid_role(role):
        raise FormatError(
            f"Invalid role '{role}' on <{element.name}>",
            element=element.name,
            value=role,
        )
    return PersonEntry(
        Person(
            name=name,
            sort=element.attributes.get("sort"),
            role=role.lower() if role is not None else None,
        )
    )


def _parse_date(element: Element) -> DateEntry:
    event_name = require_attr(element, "event")
    value = require_attr(element, "value")
    try:
        event = DateEvent(event_name.casefold())
    except ValueError:
        raise SchemaError(
            f"Unrecognized date event '{event_name}'; "
            f"expected one of: {', '.join(e.value for e in DateEvent)}",
            element=element.name,
            value=event_name,
        ) from None
    if not valid_date(value):
        raise FormatError(
            f"Invalid date '{value}' for {event.value} event",
            element=element.name,
            value=value,
        )
    return DateEntry(DatedEvent(event=event, value=value))


_PARSERS: dict[str, Callable[[Element], MetadataEntry]] = {
    "title": lambda e: TitleEntry(require_attr(e, "text")),
    "creator": _parse_person,
    "description": lambda e: TextEntry(plain_text(e)),
    "publisher": lambda e: PublisherEntry(require_attr(e, "name")),
    "contributor": _parse_person,
    "date": _parse_date,
    "identifier": lambda e: IdentifierEntry(
        Identifier(scheme=require_attr(e, "scheme"), value=require_attr(e, "value"))
    ),
    "rights": lambda e: TextEntry(plain_text(e)),
}


# =============================================================================
# Validation into BookMetadata
# =============================================================================


def read_metadata(children: Sequence[ParsedNode], language: str) -> BookMetadata:
    """Validate the children of ``<metadata>`` into a ``BookMetadata``.

    Elements with unrecognized names are ignored.

    Raises:
        SchemaError: If a required element or attribute is missing, a
            singleton element or a dated event is repeated, or a date event
            is not recognized
        FormatError: If a role, date or the language code is invalid
    """
    if not valid_language_code(language):
        raise FormatError(f"Language code '{language}' is invalid", value=language)

    elements = [child for child in children if isinstance(child, Element)]
    counts = Counter(child.name for child in elements)
    for tag in SINGLETON_TAGS:
        if counts[tag] > 1:
            raise SchemaError(f"Multiple <{tag}> elements in metadata", element=tag)

    entries: dict[str, list] = defaultdict(list)
    for child in elements:
        parser = _PARSERS.get(child.name)
        if parser is None:
            log.debug(f"Ignoring unrecognized metadata element <{child.name}>")
            continue
        entries[child.name].append(parser(child))

    for tag in REQUIRED_TAGS:
        if not entries[tag]:
            raise SchemaError(f"Missing required <{tag}> element in metadata", element=tag)

    dates: dict[DateEvent, DatedEvent] = {}
    for entry in entries["date"]:
        event = entry.dated.event
        if event in dates:
            raise SchemaError(
                f"Multiple <date> elements for the {event.value} event",
                element="date",
                value=event.value,
            )
        dates[event] = entry.dated

    def single(tag: str):
        return entries[tag][0] if entries[tag] else None

    description = single("description")
    publisher = single("publisher")
    rights = single("rights")

    metadata = BookMetadata(
        title=single("title").text,
        identifier=single("identifier").identifier,
        language=language,
        creators=[entry.person for entry in entries["creator"]],
        description=description.text if description else None,
        publisher=publisher.name if publisher else None,
        contributors=[entry.person for entry in entries["contributor"]],
        dates=[dates[event] for event in DateEvent if event in dates],
        rights=rights.text if rights else None,
    )
    log.debug(
        f"Metadata: {len(metadata.creators)} creator(s), "
        f"{len(metadata.contributors)} contributor(s), {len(metadata.dates)} date(s)"
    )
    return metadata


# =============================================================================
# Rendering
# =============================================================================


def _person_xml(tag: str, person: Person) -> str:
    attrs = ""
    if person.role is not None:
        attrs += f' opf:role="{escape_attr(person.role)}"'
    if person.sort is not None:
        attrs += f' opf:file-as="{escape_attr(person.sort)}"'
    return f"    <dc:{tag}{attrs}>{escape_text(person.name)}</dc:{tag}>\n"


def render_metadata(
    metadata: BookMetadata,
    extra: str = "",
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> str:
    """Render the OPF ``<metadata>`` block.

    ``extra`` is spliced in verbatim before the closing tag and must already
    be escaped.
    """
    parts = [
        f'  <metadata xmlns:dc="{DC_NAMESPACE}" xmlns:opf="{OPF_NAMESPACE}">\n',
        f"    <dc:title>{escape_text(metadata.title)}</dc:title>\n",
    ]
    parts.extend(_person_xml("creator", person) for person in metadata.creators)
    if metadata.description is not None:
        parts.append(
            f"    <dc:description>{escape_text(metadata.description)}</dc:description>\n"
        )
    if metadata.publisher is not None:
        parts.append(
            f"    <dc:publisher>{escape_text(metadata.publisher)}</dc:publisher>\n"
        )
    parts.extend(_person_xml("contributor", person) for person in metadata.contributors)
    for event in DateEvent:
        dated = metadata.date_for(event)
        if dated is not None:
            parts.append(
                f'    <dc:date opf:event="{event.value}">'
                f"{escape_text(dated.value)}</dc:date>\n"
            )
    parts.append(
        f'    <dc:identifier id="{escape_attr(layout.unique_id)}" '
        f'opf:scheme="{escape_attr(metadata.identifier.scheme)}">'
        f"{escape_text(metadata.identifier.value)}</dc:identifier>\n"
    )
    parts.append(f"    <dc:language>{escape_text(metadata.language)}</dc:language>\n")
    if metadata.rights is not None:
        parts.append(f"    <dc:rights>{escape_text(metadata.rights)}</dc:rights>\n")
    parts.append(extra)
    parts.append("  </metadata>\n")
    return "".join(parts)


def compile_metadata(
    children: Sequence[ParsedNode],
    language: str,
    extra: str = "",
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> MetadataBlock:
    """Compile the children of ``<metadata>`` into the OPF metadata block.

    The language comes from the root element, never from a child of
    ``<metadata>``.
    """
    metadata = read_metadata(children, language)
    return MetadataBlock(
        xml=render_metadata(metadata, extra=extra, layout=layout),
        metadata=metadata,
    )
