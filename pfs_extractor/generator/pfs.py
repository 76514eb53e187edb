# -*- coding: utf-8 -*-

# Builds PFS containers from parts, used to create test inputs. Fields can be
# overridden to produce malformed containers.

import struct
import zlib

from ..structs import (
    PFS_HEADER_MAGIC, PFS_FOOTER_MAGIC, PFS_HEADER_VERSION,
    PFS_HEADER_FORMAT, PFS_FOOTER_FORMAT, PFS_SECTION_FORMAT,
    PFS_CHUNK_DATA_OFFSET, PFS_CHUNK_ORDER_OFFSET, PFS_CHUNK_ORDER_FORMAT,
)

DEFAULT_VERSION = (('A', 1), ('N', 2), (' ', 0), (' ', 0))


class GeneratorException(Exception):

    def __init__(self, message):
        Exception.__init__(self, "Cannot generate PFS: %s" % message)


def _version_fields(version):
    components = list(version) + [(0, 0)] * (4 - len(version))
    if len(components) != 4:
        raise GeneratorException("too many version components")
    types = b""
    values = []
    for tag, value in components:
        if isinstance(tag, str):
            tag = ord(tag) if len(tag) > 0 else 0
        types += struct.pack("<B", tag)
        values.append(value)
    return types, values


class PFSSectionGenerator(object):

    def __init__(self, data=b"", signature=b"", metadata=b"",
                 metadata_signature=b"", version=DEFAULT_VERSION,
                 guid=b"\x00" * 16, guid2=b"\x00" * 16, spec=1, sizes=None):
        '''Build one section.

        Args:
            sizes (Optional[list]): Block sizes written to the header instead
                of the real block lengths.
        '''
        blocks = [data, signature, metadata, metadata_signature]
        if sizes is None:
            sizes = [len(block) for block in blocks]
        types, values = _version_fields(version)
        header = struct.pack(
            PFS_SECTION_FORMAT, guid, spec, types, *(values + [
                b"\x00" * 8] + list(sizes) + [guid2]))
        self.output = header + b"".join(blocks)


def chunk_data(order, payload):
    '''Section data for one subsection chunk: the opaque leading block with
    the order number, then the payload piece.'''
    if order > 0xFFFF:
        raise GeneratorException("order number 0x%x too large" % order)
    lead = bytearray(PFS_CHUNK_DATA_OFFSET)
    struct.pack_into(PFS_CHUNK_ORDER_FORMAT, lead, PFS_CHUNK_ORDER_OFFSET, order)
    return bytes(lead) + payload


class PFSFileGenerator(object):

    def __init__(self, sections, magic=PFS_HEADER_MAGIC,
                 version=PFS_HEADER_VERSION, data_size=None,
                 footer_magic=PFS_FOOTER_MAGIC, footer_size=None, checksum=0):
        '''Build a container around sections.

        Args:
            sections (list): PFSSectionGenerator instances or raw bytes.
        '''
        body = b"".join(
            section if isinstance(section, bytes) else section.output
            for section in sections)
        self.sections = sections
        self.body = body
        if data_size is None:
            data_size = len(body)
        if footer_size is None:
            footer_size = data_size
        header = struct.pack(PFS_HEADER_FORMAT, magic, version, data_size)
        footer = struct.pack(
            PFS_FOOTER_FORMAT, footer_size, checksum, footer_magic)
        self.output = header + body + footer


class PFSSubsectionGenerator(PFSFileGenerator):
    '''A nested container whose sections hold ordered payload chunks.'''

    def __init__(self, chunks, **kwargs):
        '''Args:
            chunks (list): (order, payload) pairs, in storage order.
        '''
        sections = [
            PFSSectionGenerator(
                data=chunk_data(order, payload), signature=b"\x5a" * 0x10)
            for order, payload in chunks
        ]
        PFSFileGenerator.__init__(self, sections, **kwargs)


class HDRGenerator(object):
    '''A Dell update executable carrying a zlib-compressed image.'''

    MARKER = b"\xAA\xEE\xAA\x76\x1B\xEC\xBB\x20\xF1\xE6\x51"

    def __init__(self, image, prefix=b"MZ\x90\x00" + b"\n" * 0x40,
                 trailer=b"\x00" * 0x20):
        compressed = zlib.compress(image)
        self.offset = len(prefix)
        self.output = (prefix + struct.pack("<I", len(compressed)) +
                       self.MARKER + b"\x01" + compressed + trailer)
