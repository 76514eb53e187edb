# -*- coding: utf-8 -*-
'''Exceptions raised while extracting, and the non-fatal warnings reported
alongside them.
'''

from .utils import print_error, purple, red


class PFSError(Exception):
    '''Base class of everything raised by pfs_extractor.'''


class FormatError(PFSError):
    '''The input violates the structure of a PFS container.'''


class TooSmall(FormatError):

    def __init__(self, size, needed):
        self.size = size
        self.needed = needed
        message = "Data is too small (0x%x bytes, need 0x%x)." % (size, needed)
        FormatError.__init__(self, message)


class BadHeaderMagic(FormatError):

    def __init__(self, magic):
        self.magic = magic
        message = "Data does not contain the header magic (%r)." % magic
        FormatError.__init__(self, message)


class UnsupportedVersion(FormatError):

    def __init__(self, version):
        self.version = version
        message = "Unknown PFS header version 0x%x." % version
        FormatError.__init__(self, message)


class Truncated(FormatError):

    def __init__(self, offset, message):
        self.offset = offset
        FormatError.__init__(self, "%s (offset 0x%x)" % (message, offset))


class TooDeep(FormatError):

    def __init__(self, depth):
        self.depth = depth
        message = "Nested containers exceed the maximum depth (%d)." % depth
        FormatError.__init__(self, message)


class SinkError(PFSError):
    '''An output could not be persisted.'''

    def __init__(self, name, reason):
        self.name = name
        self.reason = reason
        PFSError.__init__(self, "%s (%s)" % (name, reason))


class CreateFailed(SinkError):
    pass


class WriteFailed(SinkError):
    pass


class NameTooLong(SinkError):

    def __init__(self, name, limit):
        SinkError.__init__(
            self, name, "name exceeds %d characters" % limit)


class PFSWarning(object):
    '''A reportable anomaly which does not stop extraction.'''

    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.message)


class FooterMagicMismatch(PFSWarning):

    def __init__(self, magic):
        self.magic = magic
        PFSWarning.__init__(
            self, "Footer magic mismatch (%r)." % bytes(magic))


class DataSizeMismatch(PFSWarning):

    def __init__(self, header_size, footer_size):
        self.header_size = header_size
        self.footer_size = footer_size
        PFSWarning.__init__(
            self, "Data size mismatch between header (0x%x) and footer (0x%x)."
            % (header_size, footer_size))


class UnknownVersionTag(PFSWarning):

    def __init__(self, tag, value):
        self.tag = tag
        self.value = value
        PFSWarning.__init__(
            self, "Unknown version type 0x%x, value 0x%x." % (tag, value))


class Report(object):
    '''Collects warnings and per-block errors seen during one extraction.

    Every entry is printed to stderr as it arrives unless quiet is set.
    '''

    def __init__(self, quiet=False):
        self.quiet = quiet
        self.warnings = []
        self.errors = []

    def warn(self, warning, label=""):
        self.warnings.append(warning)
        if not self.quiet:
            print_error("%s%s %s" % (label, purple("Warning:"), warning))

    def error(self, error, label=""):
        self.errors.append(error)
        if not self.quiet:
            print_error("%s%s %s" % (label, red("Error:"), error))

    def has(self, kind):
        '''Check if a warning or error of the given class was reported.'''
        return any(isinstance(entry, kind)
                   for entry in self.warnings + self.errors)
