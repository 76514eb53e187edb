# -*- coding: utf-8 -*-
'''PFS container header and footer.

    +--------------------+ 0
    | "PFS.HDR."         |
    | version, data size |
    +--------------------+ 0x10
    | sections ...       |
    +--------------------+ 0x10 + data size
    | data size, csum    |
    | "PFS.FTR."         |
    +--------------------+
'''

import struct

from .errors import (
    TooSmall, BadHeaderMagic, UnsupportedVersion,
    FooterMagicMismatch, DataSizeMismatch,
)
from .structs import (
    PFS_HEADER_MAGIC, PFS_FOOTER_MAGIC, PFS_HEADER_VERSION,
    PFS_HEADER_FORMAT, PFS_HEADER_SIZE, PFS_FOOTER_FORMAT, PFS_FOOTER_SIZE,
)
from .utils import blue


class PFSHeader(object):

    def __init__(self, data):
        self.magic, self.version, self.data_size = struct.unpack(
            PFS_HEADER_FORMAT, data[:PFS_HEADER_SIZE])

    def showinfo(self, ts=''):
        print("%s%s magic %s version %d size 0x%x (%d bytes)" % (
            ts, blue("Header:"), self.magic.decode("latin-1"), self.version,
            self.data_size, self.data_size))


class PFSFooter(object):

    def __init__(self, data):
        # The checksum algorithm is not documented, it is kept as-is.
        self.data_size, self.checksum, self.magic = struct.unpack(
            PFS_FOOTER_FORMAT, data[:PFS_FOOTER_SIZE])

    def showinfo(self, ts=''):
        print("%s%s magic %s checksum 0x%08x size 0x%x (%d bytes)" % (
            ts, blue("Footer:"), self.magic.decode("latin-1"), self.checksum,
            self.data_size, self.data_size))


def validate_container(data, report=None, label=""):
    '''Check the container framing of data.

    Args:
        data (binary): The whole container, header to footer.
        report (Optional[Report]): Receives the footer warnings.
        label (Optional[string]): Prefix for reported warnings.

    Return:
        tuple: (header, footer, data_start, data_end)

    Raises:
        TooSmall, BadHeaderMagic, UnsupportedVersion
    '''
    size = len(data)
    if size < PFS_HEADER_SIZE + PFS_FOOTER_SIZE:
        raise TooSmall(size, PFS_HEADER_SIZE + PFS_FOOTER_SIZE)

    header = PFSHeader(data)
    if header.magic != PFS_HEADER_MAGIC:
        raise BadHeaderMagic(header.magic)
    if header.version != PFS_HEADER_VERSION:
        raise UnsupportedVersion(header.version)

    data_start = PFS_HEADER_SIZE
    data_end = data_start + header.data_size
    if size < data_end + PFS_FOOTER_SIZE:
        raise TooSmall(size, data_end + PFS_FOOTER_SIZE)

    footer = PFSFooter(data[data_end:data_end + PFS_FOOTER_SIZE])
    if report is not None:
        if footer.magic != PFS_FOOTER_MAGIC:
            report.warn(FooterMagicMismatch(footer.magic), label)
        if footer.data_size != header.data_size:
            report.warn(
                DataSizeMismatch(header.data_size, footer.data_size), label)

    return header, footer, data_start, data_end
