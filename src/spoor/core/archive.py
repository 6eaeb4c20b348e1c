"""Write the EPUB container around the generated documents."""

import logging
import tempfile
import zipfile
from collections.abc import Sequence
from pathlib import Path

from spoor.config import DEFAULT_LAYOUT, EpubLayout
from spoor.models.book import CompiledBook, ResourceDescriptor

log = logging.getLogger(__name__)

MIMETYPE = "application/epub+zip"

# Already compressed; deflating again gains nothing
STORED_EXTENSIONS = frozenset({"png", "jpg", "jpeg"})

CONTAINER_XML = """\
<?xml version="1.0"?>
<container version="1.0"
    xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}"
        media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def _add_directory(zf: zipfile.ZipFile, name: str) -> None:
    info = zipfile.ZipInfo(f"{name}/")
    info.external_attr = 0o40755 << 16 | 0x10
    zf.writestr(info, b"")


def write_epub(
    output_path: Path,
    book: CompiledBook,
    content_path: Path,
    resources: Sequence[ResourceDescriptor] | None = None,
    layout: EpubLayout = DEFAULT_LAYOUT,
) -> Path:
    """Write ``book`` and its files to an EPUB archive at ``output_path``.

    ``resources`` defaults to the resources the book was compiled with.
    """
    if resources is None:
        resources = book.resources
    package = layout.package_dir

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Nothing appears at output_path unless the whole archive was written
    with tempfile.NamedTemporaryFile(
        dir=output_path.parent, prefix=f".{output_path.name}.", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
    try:
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)
            _add_directory(zf, "META-INF")
            zf.writestr(
                "META-INF/container.xml",
                CONTAINER_XML.format(opf_path=layout.opf_path),
            )
            _add_directory(zf, package)
            zf.writestr(f"{package}/{layout.opf_file}", book.opf.encode("utf-8"))
            zf.writestr(f"{package}/{layout.ncx_file}", book.ncx.encode("utf-8"))
            zf.write(content_path, arcname=f"{package}/{layout.content_file}")

            for resource in resources:
                compress_type = (
                    zipfile.ZIP_STORED
                    if resource.extension.lower() in STORED_EXTENSIONS
                    else zipfile.ZIP_DEFLATED
                )
                zf.write(
                    resource.path,
                    arcname=f"{package}/{resource.filename}",
                    compress_type=compress_type,
                )
        tmp_path.chmod(0o644)
        tmp_path.replace(output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    log.info(f"Wrote {output_path} with {len(resources)} resource(s)")
    return output_path
