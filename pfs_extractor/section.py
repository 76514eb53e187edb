# -*- coding: utf-8 -*-

import struct

from .base import FirmwareObject, RawObject
from .errors import Truncated
from .structs import PFS_SECTION_FORMAT, PFS_SECTION_SIZE, get_guid_name
from .utils import sguid, blue, green
from .version import decode_version


class PFSSection(FirmwareObject):
    '''One section header and the four blocks following it.

    The blocks (data, data signature, metadata, metadata signature) are
    stored back to back after the header, any of them may be empty.
    '''

    HEADER_SIZE = PFS_SECTION_SIZE

    def __init__(self, data, offset, end, index=0, report=None, label=""):
        '''Decode the section header at offset.

        Args:
            data (binary): The buffer holding the section.
            offset (int): Start of the section header within data.
            end (int): End of the enclosing container's data region.
            index (int): Position of the section within its container.
            report (Optional[Report]): Receives version warnings.
            label (Optional[string]): Prefix for reported warnings.

        Raises:
            Truncated: The header or one of its blocks passes end.
        '''
        if offset + self.HEADER_SIZE > end:
            raise Truncated(offset, "Section header does not fit")

        (self.guid, self.spec, version_types, v1, v2, v3, v4,
         self.reserved, data_size, sign_size, meta_size, mtsg_size,
         self.guid2) = struct.unpack(
            PFS_SECTION_FORMAT, data[offset:offset + self.HEADER_SIZE])

        self.offset = offset
        self.index = index
        self.name = None
        self.version_types = version_types
        self.version_values = (v1, v2, v3, v4)
        self.version = decode_version(
            zip(version_types, self.version_values), report, label)

        blocks = []
        block_offset = offset + self.HEADER_SIZE
        for block_size in (data_size, sign_size, meta_size, mtsg_size):
            block_end = block_offset + block_size
            if block_end > end:
                raise Truncated(
                    block_offset, "Section %d block size 0x%x overruns data"
                    % (index, block_size))
            blocks.append(data[block_offset:block_end])
            block_offset = block_end

        self.data, self.signature, self.metadata, self.metadata_signature = \
            blocks
        self.section_size = block_offset - offset

        # Set by the router when the data is a nested container.
        self.nested = None

    @property
    def size(self):
        return self.section_size

    @property
    def blocks(self):
        '''The four blocks in on-disk order.'''
        return [self.data, self.signature, self.metadata,
                self.metadata_signature]

    @property
    def guid_name(self):
        return get_guid_name(sguid(self.guid))

    @property
    def objects(self):
        objects = []
        if self.nested is not None:
            objects.append(self.nested)
        for name, block in (("sign", self.signature),
                            ("meta", self.metadata),
                            ("mtsg", self.metadata_signature)):
            if len(block) > 0:
                objects.append(RawObject(block, name))
        return objects

    @property
    def attrs_label(self):
        return {
            "index": self.index,
            "offset": self.offset,
            "size": self.section_size,
            "spec": self.spec,
            "version": self.version,
            "guid2": sguid(self.guid2),
            "sizes": [len(block) for block in self.blocks],
        }

    def showinfo(self, ts='', index=None):
        guid_name = self.guid_name
        print("%s%s %d %s%s spec %d version %s size 0x%x (%d bytes)" % (
            ts, blue("Dell PFSSection:"), self.index, green(sguid(self.guid)),
            " (%s)" % guid_name if guid_name is not None else "",
            self.spec, self.version, self.section_size, self.section_size))
        print("%s  guid2 %s data 0x%x sign 0x%x meta 0x%x mtsg 0x%x" % (
            ts, sguid(self.guid2), len(self.data), len(self.signature),
            len(self.metadata), len(self.metadata_signature)))
        if self.nested is not None:
            self.nested.showinfo("%s  " % ts)


def walk_sections(data, start, end, report=None, label=""):
    '''Yield each section between start and end.

    There is no section count, sections are packed until the end of the
    data region. The generator stops by raising Truncated if a section does
    not fit; sections already yielded are unaffected.
    '''
    index = 0
    offset = start
    while offset < end:
        section = PFSSection(data, offset, end, index, report, label)
        yield section
        offset += section.section_size
        index += 1
