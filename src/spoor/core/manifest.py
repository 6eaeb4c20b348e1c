"""Compile the OPF ``<manifest>`` block."""

from collections.abc import Sequence

from spoor.config import DEFAULT_LAYOUT, EpubLayout
from spoor.core.escape import escape_attr
from spoor.errors import ResourceError
from spoor.models.book import ResourceDescriptor

XHTML_MEDIA_TYPE = "application/xhtml+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"

MEDIA_TYPES = {
    "css": "text/css",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
}


def media_type_for(resource: ResourceDescriptor) -> str:
    """MIME type of a resource, from its extension.

    Raises:
        ResourceError: If the extension is not supported
    """
    media_type = MEDIA_TYPES.get(resource.extension.lower())
    if media_type is None:
        raise ResourceError(
            f"Resource '{resource.filename}' has unsupported extension "
            f"'{resource.extension}'",
            value=resource.filename,
        )
    return media_type


def _item(item_id: str, href: str, media_type: str) -> str:
    return (
        f'    <item id="{escape_attr(item_id)}" href="{escape_attr(href)}" '
        f'media-type="{media_type}"/>\n'
    )


def compile_manifest(
    resources: Sequence[ResourceDescriptor],
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> str:
    """Render the manifest: content document, NCX, then each resource in order."""
    parts = [
        "  <manifest>\n",
        _item("content", layout.content_file, XHTML_MEDIA_TYPE),
        _item("ncx", layout.ncx_file, NCX_MEDIA_TYPE),
    ]
    for index, resource in enumerate(resources):
        parts.append(_item(f"item{index}", resource.filename, media_type_for(resource)))
    parts.append("  </manifest>\n")
    return "".join(parts)
