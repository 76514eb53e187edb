# -*- coding: utf-8 -*-

from .base import FirmwareObject
from .chunks import ChunkReassembler
from .container import validate_container
from .errors import Report, TooDeep
from .router import PayloadRouter
from .section import walk_sections
from .structs import MAX_DEPTH, PFS_FOOTER_SIZE
from .utils import blue, green


class PFSFile(FirmwareObject):
    '''One pass over a PFS container.

    The top-level pass writes each section's blocks. When a section holds a
    nested container that container is processed by its own PFSFile as a
    subsection: its chunks are collected and written as a single payload
    named 'target'.
    '''

    def __init__(self, data, target=None, depth=0, report=None,
                 max_depth=MAX_DEPTH):
        self.data = memoryview(data)
        self.name = target
        self.guid = None
        self.target = target
        self.depth = depth
        self.max_depth = max_depth
        self.report = report if report is not None else Report()

        self.header = None
        self.footer = None
        self.data_start = 0
        self.data_end = 0
        self.valid_header = False
        self.sections = []
        self.reassembler = None
        if target is not None:
            self.reassembler = ChunkReassembler(target)

    @property
    def is_subsection(self):
        return self.target is not None

    @property
    def report_label(self):
        if self.target is None:
            return ""
        return "%s: " % self.target

    @property
    def size(self):
        if self.header is None:
            return len(self.data)
        return self.data_end + PFS_FOOTER_SIZE

    def check_header(self):
        '''Validate the header and footer, raising a FormatError if the
        container cannot be walked.'''
        if self.depth > self.max_depth:
            raise TooDeep(self.max_depth)
        (self.header, self.footer, self.data_start,
         self.data_end) = validate_container(
            self.data, self.report, self.report_label)
        self.valid_header = True
        return True

    def process(self, sink):
        '''Walk every section and route it to sink.

        Sections are written as they are found, a Truncated error stops the
        walk but keeps what was already written. A subsection only writes its
        payload once the walk completed.
        '''
        if not self.valid_header:
            self.check_header()

        router = PayloadRouter(self, sink)
        for section in walk_sections(
                self.data, self.data_start, self.data_end, self.report,
                self.report_label):
            self.sections.append(section)
            router.route(section)
        router.finish()
        return True

    @property
    def objects(self):
        return self.sections

    @property
    def attrs_label(self):
        attrs = {"depth": self.depth, "sections": len(self.sections)}
        if self.header is not None:
            attrs["version"] = self.header.version
            attrs["size"] = self.header.data_size
        if self.footer is not None:
            attrs["checksum"] = self.footer.checksum
        if self.reassembler is not None and self.reassembler.payload is not None:
            attrs["partitions"] = self.reassembler.partitions
            attrs["payload_size"] = len(self.reassembler.payload)
        return attrs

    def showinfo(self, ts='', index=None):
        if self.is_subsection:
            print("%s%s %s" % (
                ts, blue("Dell PFS Subsection:"), green(self.target)))
        else:
            print("%s%s" % (ts, blue("Dell PFS:")))
        if self.header is not None:
            self.header.showinfo("%s  " % ts)
        if self.footer is not None:
            self.footer.showinfo("%s  " % ts)
        for section in self.sections:
            section.showinfo("%s  " % ts)
        if self.reassembler is not None and self.reassembler.payload is not None:
            payload_size = len(self.reassembler.payload)
            print("%s  %s partitions %d size 0x%x (%d bytes)" % (
                ts, blue("Payload:"), self.reassembler.partitions,
                payload_size, payload_size))


def extract(data, sink, target=None, depth=0, report=None,
            max_depth=MAX_DEPTH):
    '''Extract a PFS container to sink.

    Args:
        data (binary): The whole container.
        sink (object): Output with a write(name, data) method.
        target (Optional[string]): Name of the reassembled payload, when set
            the container is handled as a subsection.
        depth (Optional[int]): Nesting level of this container.
        report (Optional[Report]): Collects warnings and block errors.
        max_depth (Optional[int]): Deepest nesting level accepted.

    Return:
        PFSFile: the processed container.

    Raises:
        FormatError: The container itself could not be parsed.
    '''
    pfs = PFSFile(data, target, depth, report, max_depth)
    pfs.process(sink)
    return pfs
