# -*- coding: utf-8 -*-
'''Dell firmware update (HDR) unpacking.

Dell update executables carry the PFS image zlib-compressed. The stream is
preceded by a little-endian length and a fixed marker, the 0x789C at the end
of the pattern is the zlib header. The marker alone appears several times in
an update, the zlib header check avoids those.
'''

import re
import struct
import zlib

HDR_PATTERN = re.compile(
    br'.{4}\xAA\xEE\xAA\x76\x1B\xEC\xBB\x20\xF1\xE6\x51.{1}\x78\x9C',
    re.DOTALL)

# length, marker, one unknown byte
HDR_PREFIX_SIZE = 16


def find_hdr(data):
    '''Return the offset of the compressed HDR length field, or None.'''
    match = HDR_PATTERN.search(data)
    if match is None:
        return None
    return match.start()


def unpack_hdr(data):
    '''Decompress the HDR image embedded in a Dell update.

    Return:
        binary: The decompressed image, None if no HDR was found or it could
            not be decompressed.
    '''
    start = find_hdr(data)
    if start is None:
        return None
    length = struct.unpack("<I", data[start:start + 4])[0]
    compressed = data[start + HDR_PREFIX_SIZE:start + HDR_PREFIX_SIZE + length]
    try:
        return zlib.decompress(compressed)
    except zlib.error:
        return None
