"""Result extraction from the archive returned by the processing service.

Policy: the result is the first file entry in the archive's enumeration
(central directory) order. Directory entries are skipped. Extra files are
ignored, and the entry's content type is not checked.
"""

import zipfile
from pathlib import Path
from typing import BinaryIO

from outpaint.processing.exceptions import ArchiveEmptyError, ArchiveReadError
from outpaint.processing.models import ExtractedImage


def read_first_file(archive: Path | BinaryIO) -> ExtractedImage:
    """Return the first file entry of a ZIP archive.

    Raises:
        ArchiveEmptyError: if the archive holds no files.
        ArchiveReadError: if the archive is corrupt or not a ZIP file.
    """
    try:
        with zipfile.ZipFile(archive) as zf:
            files = [info for info in zf.infolist() if not info.is_dir()]
            if not files:
                raise ArchiveEmptyError()
            first = files[0]
            data = zf.read(first)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, OSError, EOFError) as exc:
        raise ArchiveReadError() from exc
    return ExtractedImage(name=first.filename, data=data, entry_count=len(files))
