import shutil
import logging
from pathlib import Path

from ..exceptions import DirectoryCreateError, MoveError

class ArchiveWriter:
    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def place(self, src: Path, archive_root: Path, date_path: str, event_name: str) -> Path:
        """
        Moves src into archive_root/date_path/event_name, keeping its filename.

        Raises:
            DirectoryCreateError: the event folder could not be created (fatal)
            MoveError: the file could not be moved (the file stays where it was)
        """
        dest_dir = archive_root / date_path / event_name
        dest = dest_dir / src.name

        if self.dry_run:
            logging.info(f"[DRY RUN] Move {src} -> {dest}")
            return dest

        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(f"FAIL: cannot create {dest_dir} (Permission denied?): {e}") from e

        if dest.exists():
            raise MoveError(f"{dest} already exists, refusing to overwrite")

        try:
            # shutil.move renames when it can and copies+deletes across filesystems
            shutil.move(str(src), str(dest))
        except (OSError, shutil.Error) as e:
            # A failed cross-device copy can leave half a file behind; drop it
            # so the next run does not refuse to overwrite it.
            if src.exists() and dest.exists():
                try:
                    dest.unlink()
                except OSError as cleanup_error:
                    logging.warning(f"Could not remove partial copy {dest}: {cleanup_error}")
            raise MoveError(f"Failed to move {src} -> {dest}: {e}") from e

        return dest
