"""Validate resource file arguments and describe them for the manifest."""

import logging
from collections.abc import Iterable
from pathlib import Path

from spoor.core.validators import (
    IMAGE_EXTENSIONS,
    MAX_FILENAME_LENGTH,
    RESOURCE_EXTENSIONS,
    split_filename,
    valid_resource_filename,
)
from spoor.errors import ResourceError
from spoor.models.book import ResourceDescriptor

log = logging.getLogger(__name__)


def _check_filename(filename: str) -> None:
    if not 0 < len(filename) <= MAX_FILENAME_LENGTH:
        raise ResourceError(f"File name '{filename}' is empty or too long", value=filename)
    parts = split_filename(filename)
    if parts is None:
        raise ResourceError(f"File name '{filename}' has invalid format", value=filename)
    if parts[1].lower() not in RESOURCE_EXTENSIONS:
        raise ResourceError(
            f"File name '{filename}' has unsupported extension", value=filename
        )
    if not valid_resource_filename(filename):
        raise ResourceError(
            f"File name '{filename}' contains DOS device name", value=filename
        )


def describe_resource(path: str | Path) -> ResourceDescriptor:
    """Describe one resource argument after checking its file name.

    Raises:
        ResourceError: If the file name is invalid
    """
    filename = Path(path).name
    _check_filename(filename)
    _, extension = split_filename(filename)
    return ResourceDescriptor(path=str(path), filename=filename, extension=extension.lower())


def check_unique_filenames(resources: Iterable[ResourceDescriptor]) -> None:
    """Reject two resources whose file names are equal ignoring case.

    Raises:
        ResourceError: Naming the second of the colliding file names
    """
    seen: set[str] = set()
    for resource in resources:
        key = resource.filename.lower()
        if key in seen:
            raise ResourceError(
                f"Resource filename '{resource.filename}' used multiple times",
                value=resource.filename,
            )
        seen.add(key)


def describe_resources(paths: Iterable[str | Path]) -> list[ResourceDescriptor]:
    """Describe all resource arguments, keeping their order.

    Raises:
        ResourceError: If a file name is invalid or two file names are equal
            ignoring case
    """
    resources = [describe_resource(path) for path in paths]
    check_unique_filenames(resources)
    return resources


def find_cover(resources: Iterable[ResourceDescriptor]) -> ResourceDescriptor | None:
    """First image resource named ``cover``, ignoring case."""
    for resource in resources:
        if resource.stem.lower() == "cover" and resource.extension.lower() in IMAGE_EXTENSIONS:
            log.debug(f"Using {resource.filename} as cover image")
            return resource
    return None
