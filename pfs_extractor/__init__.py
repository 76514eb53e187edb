'''Dell PFS firmware update extraction.

A PFS file is a sequence of sections framed by a "PFS.HDR." header and a
"PFS.FTR." footer. Each section holds data, a data signature, metadata and a
metadata signature. Section data may be a nested PFS (a subsection) whose
chunks are reassembled into a single payload.

    >>> from pfs_extractor import extract, DirectorySink
    >>> pfs = extract(data, DirectorySink("update.bin.extracted"))
    >>> pfs.showinfo()
'''

from .errors import (
    PFSError, FormatError, TooSmall, BadHeaderMagic, UnsupportedVersion,
    Truncated, TooDeep, SinkError, CreateFailed, WriteFailed, NameTooLong,
    PFSWarning, FooterMagicMismatch, DataSizeMismatch, UnknownVersionTag,
    Report,
)
from .pfs import PFSFile, extract
from .section import PFSSection, walk_sections
from .sink import DirectorySink, MemorySink
from .version import decode_version


__title__ = "pfs_extractor"
__version__ = "0.2.0"
__author__ = "Teddy Reed"
__license__ = "BSD"
