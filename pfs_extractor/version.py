# -*- coding: utf-8 -*-
'''Section version strings.

A section header carries four version components, each described by a type
byte: 'A' components print as hex, 'N' components as decimal, and a space or
NUL ends the version early.
'''

from .errors import UnknownVersionTag

VERSION_HEX = ord('A')
VERSION_DEC = ord('N')
VERSION_END = (ord(' '), 0)

EMPTY_VERSION = "."


def _tag_value(tag):
    if isinstance(tag, str):
        return ord(tag) if len(tag) > 0 else 0
    return tag


def decode_version(components, report=None, label=""):
    '''Build the dot-terminated version fragment used in output names.

    Args:
        components (iterable): (type, value) pairs; a type is a byte value
            or a one character string.
        report (Optional[Report]): Receives an UnknownVersionTag for each
            component with an unrecognized type.
        label (Optional[string]): Prefix for reported warnings.

    Return:
        string: e.g. "1.2.", or EMPTY_VERSION if nothing was printed.
    '''
    version = ""
    for tag, value in components:
        tag = _tag_value(tag)
        if tag == VERSION_HEX:
            version += "%X." % value
        elif tag == VERSION_DEC:
            version += "%d." % value
        elif tag in VERSION_END:
            break
        elif report is not None:
            report.warn(UnknownVersionTag(tag, value), label)
    if len(version) == 0:
        return EMPTY_VERSION
    return version
