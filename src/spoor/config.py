"""Fixed names used inside the generated EPUB and logging settings."""

from pydantic import BaseModel, ConfigDict


class EpubLayout(BaseModel):
    """Names of the files and identifiers the compilers emit."""

    model_config = ConfigDict(frozen=True)

    content_file: str = "content.html"
    ncx_file: str = "toc.ncx"
    opf_file: str = "content.opf"
    package_dir: str = "OEBPS"
    unique_id: str = "uid"
    generator: str = "Spoor"

    @property
    def opf_path(self) -> str:
        """Path of the OPF document inside the archive."""
        return f"{self.package_dir}/{self.opf_file}"


DEFAULT_LAYOUT = EpubLayout()

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENVVAR = "SPOOR_LOG_LEVEL"
