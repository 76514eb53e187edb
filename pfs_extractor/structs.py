# -*- coding: utf-8 -*-

import struct

PFS_HEADER_MAGIC = b"PFS.HDR."
PFS_FOOTER_MAGIC = b"PFS.FTR."

# Only one header version has been observed.
PFS_HEADER_VERSION = 1

# magic, version, data size
PFS_HEADER_FORMAT = "<8sII"
PFS_HEADER_SIZE = struct.calcsize(PFS_HEADER_FORMAT)

# data size, checksum, magic
PFS_FOOTER_FORMAT = "<II8s"
PFS_FOOTER_SIZE = struct.calcsize(PFS_FOOTER_FORMAT)

# guid1, header version, version types, 4 version values, reserved,
# data, data signature, metadata, metadata signature sizes, guid2
PFS_SECTION_FORMAT = "<16sI4s4H8sIIII16s"
PFS_SECTION_SIZE = struct.calcsize(PFS_SECTION_FORMAT)

# Every subsection chunk starts with 0x248 bytes of undocumented data, the
# only known field is the order number.
PFS_CHUNK_DATA_OFFSET = 0x248
PFS_CHUNK_ORDER_OFFSET = 0x3E
PFS_CHUNK_ORDER_FORMAT = "<H"

# Nesting is unbounded in the format.
MAX_DEPTH = 32

MAX_NAME_LENGTH = 240

PFS_SECTION_SUFFIXES = ("data", "sign", "meta", "mtsg")

PFS_GUIDS = {
    "FIRMWARE_VOLUMES": "7ec6c2b0-3fe3-42a0-a316-22dd0517c1e8",
    "INTEL_ME":         "7439ed9e-70d3-4b65-9e33-1963a7ad3c37",
    "BIOS_ROMS_1":      "08e56a30-62ed-41c6-9240-b7455ee653d7",
    "BIOS_ROMS_2":      "492261e4-0659-424c-82b6-73274389e7a7"
}


def get_guid_name(guid):
    '''Return the known PFS name for a string GUID, or None.'''
    for name, match_guid in PFS_GUIDS.items():
        if match_guid == guid:
            return name
    return None
