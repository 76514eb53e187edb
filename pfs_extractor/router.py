# -*- coding: utf-8 -*-
'''Decide what happens to the blocks of each section.

In a normal pass every non-empty block is written, and a data block which is
itself a PFS container is parsed again as a subsection. In a subsection pass
only the data blocks are used, as chunks of the reassembled payload.
'''

from .chunks import PFSChunk
from .errors import FormatError, SinkError, NameTooLong
from .structs import PFS_HEADER_MAGIC, PFS_SECTION_SUFFIXES, MAX_NAME_LENGTH


def section_name(index, version, suffix, limit=MAX_NAME_LENGTH):
    '''Output name for one block of a section.

    Raises:
        NameTooLong: The name would exceed limit characters.
    '''
    name = "section_%d_%s%s" % (index, version, suffix)
    if len(name) > limit:
        raise NameTooLong(name, limit)
    return name


def is_container(data):
    return bytes(data[:len(PFS_HEADER_MAGIC)]) == PFS_HEADER_MAGIC


class PayloadRouter(object):

    def __init__(self, container, sink):
        '''Route the sections of container to sink.

        Args:
            container (PFSFile): The pass the sections belong to, it holds the
                mode, depth, report and (in subsection mode) the reassembler.
            sink (object): Output with a write(name, data) method.
        '''
        self.container = container
        self.sink = sink
        self.report = container.report

    def route(self, section):
        if self.container.reassembler is not None:
            self._collect(section)
        else:
            self._emit_blocks(section)

    def finish(self):
        '''Write the reassembled payload of a subsection pass.'''
        reassembler = self.container.reassembler
        if reassembler is None:
            return
        try:
            reassembler.emit(self.sink)
        except SinkError as e:
            self.report.error(e, self.container.report_label)

    def write(self, name, data):
        '''Write one output, reporting instead of raising sink failures.

        Return:
            bool: True if the sink accepted the data.
        '''
        try:
            self.sink.write(name, data)
        except SinkError as e:
            self.report.error(e, self.container.report_label)
            return False
        return True

    def _name(self, section, suffix):
        try:
            return section_name(section.index, section.version, suffix)
        except NameTooLong as e:
            self.report.error(e, self.container.report_label)
            return None

    def _emit_blocks(self, section):
        for suffix, block in zip(PFS_SECTION_SUFFIXES, section.blocks):
            if len(block) == 0:
                continue
            name = self._name(section, suffix)
            if name is not None:
                self.write(name, block)
            # The raw data is written first so it is kept if parsing fails.
            if suffix == "data" and is_container(block):
                self._recurse(section)

    def _recurse(self, section):
        from .pfs import PFSFile

        target = self._name(section, "payload")
        if target is None:
            return
        nested = PFSFile(
            section.data, target=target, depth=self.container.depth + 1,
            report=self.report, max_depth=self.container.max_depth)
        section.nested = nested
        try:
            nested.process(self.sink)
        except FormatError as e:
            self.report.error(e, nested.report_label)

    def _collect(self, section):
        if len(section.data) == 0:
            return
        chunk = PFSChunk.from_section_data(
            section.data, section.offset + section.HEADER_SIZE)
        self.container.reassembler.add(chunk)
