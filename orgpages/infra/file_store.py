"""
File store infrastructure for orgpages.

Reads curated HTML fragments and writes generated pages with:
- Atomic writes (every page to a temp file, then rename them all)
- Automatic parent directory creation
- Missing fragments degrading to empty text
"""

import os
import tempfile
from pathlib import Path
from typing import Dict
import logging

from ..exit_codes import MissingFragmentFile

logger = logging.getLogger(__name__)


class FileStore:
    """
    Local file access for the page generator.

    Example:
        store = FileStore(fragments_dir=Path("."), output_dir=Path("site"))
        fragment = store.read_fragment_or_empty("manual_all_list.html")
        store.write_pages({"all.html": html})
    """

    def __init__(self, fragments_dir: Path, output_dir: Path):
        """
        Initialize FileStore.

        Args:
            fragments_dir: Directory holding curated fragment files
            output_dir: Directory the generated pages are written to
        """
        self.fragments_dir = Path(fragments_dir).expanduser()
        self.output_dir = Path(output_dir).expanduser()

    def read_fragment(self, name: str) -> str:
        """
        Read a curated fragment verbatim.

        Raises:
            MissingFragmentFile: If the file is absent or unreadable
        """
        path = self.fragments_dir / name
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise MissingFragmentFile(path, str(e)) from e

    def read_fragment_or_empty(self, name: str) -> str:
        """Read a curated fragment, returning "" with a warning if it can't be loaded."""
        try:
            return self.read_fragment(name)
        except MissingFragmentFile as e:
            logger.warning(str(e))
            return ""

    def _write_temp(self, path: Path, text: str) -> str:
        """Write text to a temp file beside `path` and return the temp path."""
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp"
        )

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
        except Exception:
            self._discard(temp_path)
            raise
        return temp_path

    def _discard(self, temp_path: str) -> None:
        try:
            os.unlink(temp_path)
        except OSError:
            pass

    def write_pages(self, pages: Dict[str, str]) -> Dict[str, Path]:
        """
        Write rendered pages into the output directory.

        Every page is written to a temp file first; targets are only
        replaced once all temp files are complete, so a failed write
        leaves existing pages untouched.

        Args:
            pages: Mapping of file name to document text

        Returns:
            Mapping of file name to the path written
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        staged: Dict[str, str] = {}
        try:
            for name, text in pages.items():
                staged[name] = self._write_temp(self.output_dir / name, text)

            written = {}
            for name in pages:
                path = self.output_dir / name
                # Atomic rename
                os.replace(staged[name], path)
                del staged[name]
                logger.debug(f"Wrote {path}")
                written[name] = path
            return written
        finally:
            for temp_path in staged.values():
                self._discard(temp_path)
