import os
import logging
from pathlib import Path
from typing import Iterator, Set, Optional, Iterable


class DirectoryWalker:
    def __init__(self, extensions: Iterable[str], skip_dirs: Optional[Set[Path]] = None):
        """
        Args:
            extensions: Allowed suffixes such as {'.jpg', '.mov'}. Compared lowercase.
            skip_dirs: Directories (and everything below them) that are never entered.
        """
        self.extensions = {e.lower() for e in extensions}
        self.skip_dirs = {Path(d).resolve() for d in (skip_dirs or set())}

    def walk(self, root: Path) -> Iterator[Path]:
        """
        Lazily yields matching files under root.

        Entries are sorted by name (plain codepoint order, so 'B.jpg' comes
        before 'a.jpg') and subdirectories are descended into at the point
        they appear among their siblings. Each directory is only listed when
        it is reached, so files moved away earlier in the run are never seen.
        """
        if self._is_skipped(root):
            return

        try:
            with os.scandir(root) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logging.warning(f"Cannot read directory {root}: {e}")
            return

        for entry in entries:
            path = root / entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logging.warning(f"Cannot stat {path}: {e}")
                continue

            if is_dir:
                yield from self.walk(path)
            elif is_file and self.matches(path):
                yield path

    def matches(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def _is_skipped(self, directory: Path) -> bool:
        if not self.skip_dirs:
            return False
        resolved = directory.resolve()
        return any(sd == resolved or sd in resolved.parents for sd in self.skip_dirs)
