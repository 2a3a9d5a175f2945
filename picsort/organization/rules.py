import os

from ..models import ArchiveTemplate, CaptureDate


def format_component(value: int) -> str:
    """Always prefixes values <= 9 with a zero. Larger values keep their natural width."""
    if value <= 9:
        return f"0{value}"
    return str(value)


def build_path(capture: CaptureDate, template: ArchiveTemplate) -> str:
    """
    Maps a capture date onto the archive folder structure.

    With the template year/month, 2024-03-07 becomes '2024/03'.
    """
    segments = [format_component(capture.component(field)) for field in template.fields]
    return os.path.join(*segments)
