# -*- coding: utf-8 -*-
'''Outputs for extracted blobs.

A sink has a single write(name, data) method and raises a SinkError subclass
when the blob cannot be stored.
'''

import os

from .errors import CreateFailed, WriteFailed
from .utils import red


class DirectorySink(object):
    '''Write each blob as a file within a directory.'''

    def __init__(self, path, quiet=False):
        self.path = path
        self.quiet = quiet
        self.written = []

    def write(self, name, data):
        '''Write binary data to path/name.

        Args:
            name (string): File name, created or truncated.
            data (binary): Content to be written.
        '''
        path = os.path.join(self.path, name)
        try:
            if not os.path.isdir(self.path):
                os.makedirs(self.path)
            fh = open(path, 'wb')
        except OSError as e:
            raise CreateFailed(path, str(e))
        with fh:
            try:
                fh.write(data)
            except OSError as e:
                raise WriteFailed(path, str(e))
        self.written.append(path)
        if not self.quiet:
            print("Wrote: %s" % (red(path)))


class MemorySink(object):
    '''Keep written blobs in memory, in write order.'''

    def __init__(self):
        self.writes = []

    def write(self, name, data):
        self.writes.append((name, bytes(data)))

    @property
    def names(self):
        return [name for name, _ in self.writes]

    def get(self, name):
        for _name, data in self.writes:
            if _name == name:
                return data
        return None
