# -*- coding: utf-8 -*-

import sys
import struct


def blue(msg):
    '''Return the input string as console-escaped blue.'''
    return "\033[1;36m%s\033[1;m" % msg


def red(msg):
    '''Return the input string as console-escaped red.'''
    return "\033[31m%s\033[1;m" % msg


def green(msg):
    '''Return the input string as console-escaped green.'''
    return "\033[32m%s\033[1;m" % msg


def purple(msg):
    '''Return the input string as console-escaped purple.'''
    return "\033[1;35m%s\033[1;m" % msg


def print_error(msg):
    '''Write the input string to stderr.'''
    print(msg, file=sys.stderr)


def sguid(b, big=False):
    '''RFC4122 binary GUID as string.'''
    if b is None or len(b) != 16:
        return ""
    a, b, c, d = struct.unpack("%sIHH8s" % (">" if big else "<"), bytes(b))
    d = d.hex()
    return "%08x-%04x-%04x-%s-%s" % (a, b, c, d[:4], d[4:])


def flatten_firmware_objects(base_objects):
    '''Flatten the parent-child relations between firmware objects.

    Args:
        base_objects (list): Nested list of object info dictionaries, as
            returned by 'iterate_objects'.

    Returns:
        list: Non-Nested list of object info dictionaries.
    '''
    objects = []
    for _object in base_objects:
        objects.append(_object)
        if "objects" in _object and len(_object["objects"]) > 0:
            objects += flatten_firmware_objects(_object["objects"])
    return objects
