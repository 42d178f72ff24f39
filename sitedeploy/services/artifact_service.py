"""Presence checks for the deployable site files."""

from pathlib import Path
from typing import Iterable

from sitedeploy.constants import REQUIRED_FILES
from sitedeploy.exceptions import MissingArtifactsError


class ArtifactService:
    """Knows which files make up the site and whether they exist."""

    def __init__(self, site_dir: Path, files: Iterable[str] = REQUIRED_FILES):
        self.site_dir = Path(site_dir)
        self.files = tuple(files)

    def find_missing(self) -> list[str]:
        """Every required name that is not a regular file, in declared order."""
        return [name for name in self.files if not (self.site_dir / name).is_file()]

    def ensure_present(self) -> None:
        """
        Raises:
            MissingArtifactsError: Listing all missing files at once
        """
        missing = self.find_missing()
        if missing:
            raise MissingArtifactsError(missing, str(self.site_dir))
