import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any

import exifread

from .. import config
from ..exceptions import NotAFileError, NoMetadataError, MissingDateFieldsError
from ..models import CaptureDate


class TimestampResolver:
    """
    Works out when a photo was taken from its EXIF data.

    Strategy:
      - Read tags with 'exifread' (details=False, we only need dates).
      - Both 'Image DateTime' and 'EXIF DateTimeOriginal' must be filled in,
        unless allow_partial_dates is set.
      - Apply them in that order; whichever usable tag comes last wins, so
        the original capture time takes precedence.
    """

    def __init__(self, allow_partial_dates: bool = False):
        self.allow_partial_dates = allow_partial_dates

    def resolve(self, path: Path) -> CaptureDate:
        """
        Returns the capture date for an image file.

        Raises:
            NotAFileError: path is not a regular file (moved, broken link...)
            NoMetadataError: no EXIF tags could be read
            MissingDateFieldsError: a date tag is absent or blank, or none of them parses
        """
        if not path.is_file():
            raise NotAFileError(path, f"{path} not a file.")

        tags = self.read_tags(path)
        if not tags:
            raise NoMetadataError(path, f"No EXIF data found in {path}")

        if not self.allow_partial_dates:
            blank = [tag for tag in config.DATE_TAGS if not str(tags.get(tag, "")).strip()]
            if blank:
                raise MissingDateFieldsError(path, f"Could not find dates in EXIF data of {path} (missing {', '.join(blank)})")

        picture_date = None
        for tag in config.DATE_TAGS:
            dt = self._parse_exif_date(tags.get(tag))
            if dt:
                picture_date = dt

        if picture_date is None:
            raise MissingDateFieldsError(path, f"Could not find dates in EXIF data of {path}")

        return CaptureDate.from_datetime(picture_date)

    def read_tags(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open('rb') as f:
                # details=False skips makernotes and thumbnails
                return exifread.process_file(f, details=False)
        except Exception as e:
            logging.warning(f"ExifRead failed for {path}: {e}")
            return {}

    def _parse_exif_date(self, value) -> Optional[datetime]:
        """Parses an EXIF 'YYYY:MM:DD HH:MM:SS' value. Blank or broken values give None."""
        if value is None:
            return None
        dt_str = str(value).strip()
        if not dt_str:
            return None

        # Some cameras append sub-seconds or a timezone; keep the first 19 chars
        dt_str = dt_str[:19].replace(':', '-', 2)
        try:
            return datetime.strptime(dt_str, "%Y-%m-%d %H:%M:%S")
        except ValueError:
            logging.debug(f"Unparseable EXIF date '{value}'")
            return None
