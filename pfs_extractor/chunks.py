# -*- coding: utf-8 -*-
'''Reassembly of subsection payloads.

A subsection is a nested container whose sections each carry one chunk of
the real payload. Chunks are not stored in order, each starts with a
0x248-byte block holding its order number.
'''

import struct

from .errors import Truncated
from .structs import (
    PFS_CHUNK_DATA_OFFSET, PFS_CHUNK_ORDER_OFFSET, PFS_CHUNK_ORDER_FORMAT,
)

IDLE = "idle"
COLLECTING = "collecting"
SORTED = "sorted"
EMITTED = "emitted"


class PFSChunk(object):

    def __init__(self, order, data):
        self.order = order
        self.data = data

    @classmethod
    def from_section_data(cls, data, offset=0):
        '''Split a subsection section's data block into its chunk.'''
        if len(data) < PFS_CHUNK_DATA_OFFSET:
            raise Truncated(
                offset, "Chunk of 0x%x bytes is shorter than its 0x%x byte "
                "header" % (len(data), PFS_CHUNK_DATA_OFFSET))
        order = struct.unpack_from(
            PFS_CHUNK_ORDER_FORMAT, data, PFS_CHUNK_ORDER_OFFSET)[0]
        return cls(order, data[PFS_CHUNK_DATA_OFFSET:])


class ChunkReassembler(object):
    '''Collect chunks during one walk and join them once it finished.'''

    def __init__(self, name):
        self.name = name
        self.chunks = []
        self.partitions = 0
        self.state = IDLE
        self.payload = None

    def add(self, chunk):
        if self.state not in (IDLE, COLLECTING):
            raise ValueError("Reassembler for %s is already %s" % (
                self.name, self.state))
        self.chunks.append(chunk)
        self.partitions += 1
        self.state = COLLECTING

    def reassemble(self):
        '''Order the chunks and concatenate them into the payload.'''
        # sorted() is stable, duplicate order numbers keep walk order.
        ordered = sorted(self.chunks, key=lambda chunk: chunk.order)
        self.payload = b"".join(bytes(chunk.data) for chunk in ordered)
        self.chunks = []
        self.state = SORTED
        return self.payload

    def emit(self, sink):
        '''Reassemble (if needed) and write the payload once.'''
        if self.state == EMITTED:
            raise ValueError("Payload %s was already written" % self.name)
        if self.state != SORTED:
            self.reassemble()
        sink.write(self.name, self.payload)
        self.state = EMITTED
        return self.payload
