# -*- coding: utf-8 -*-

# Dell PFS Firmware Update Extractor
#
# Extracts every section of a Dell PFS update (data, signature, metadata and
# metadata signature) into a directory. Sections holding a nested PFS are
# also written as the reassembled subsection payload. Update executables are
# accepted too, the compressed HDR image is unpacked first.

import argparse
import sys

from .errors import FormatError, Report
from .hdr import unpack_hdr
from .pfs import PFSFile
from .router import is_container
from .sink import DirectorySink
from .structs import MAX_DEPTH
from .utils import print_error, flatten_firmware_objects, blue


def list_objects(pfs):
    '''Print the flattened object tree, one object per line.'''
    for _object in flatten_firmware_objects(pfs.iterate_objects()):
        attrs = _object["attrs"]
        print("%s %s %s size= %d" % (
            blue(_object["type"]), _object["label"], _object["guid"],
            attrs.get("size", 0)))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Extract the contents of a Dell PFS firmware update.")
    parser.add_argument(
        '-o', "--output", default=None,
        help="Write sections to this folder (default: <file>.extracted).")
    parser.add_argument(
        "-i", "--info", action="store_true", default=False,
        help="Print the container structure.")
    parser.add_argument(
        "-l", "--list", action="store_true", default=False,
        help="Print one line per section, subsection and block.")
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=False,
        help="Do not print written files or warnings.")
    parser.add_argument(
        "--max-depth", type=int, default=MAX_DEPTH,
        help="Deepest nested container to parse (default: %d)." % MAX_DEPTH)
    parser.add_argument("file", help="The file to work on")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        with open(args.file, 'rb') as fh:
            input_data = fh.read()
    except OSError as e:
        print_error("Error: Cannot read file (%s) (%s)." % (args.file, str(e)))
        return 1

    if not is_container(input_data):
        hdr_data = unpack_hdr(input_data)
        if hdr_data is None or not is_container(hdr_data):
            print_error("Error: (%s) is not a PFS file or Dell update." % (
                args.file))
            return 1
        input_data = hdr_data

    output = args.output
    if output is None:
        output = "%s.extracted" % args.file

    report = Report(quiet=args.quiet)
    sink = DirectorySink(output, quiet=args.quiet)
    pfs = PFSFile(input_data, report=report, max_depth=args.max_depth)
    try:
        pfs.process(sink)
    except FormatError as e:
        print_error("Error: %s" % str(e))
        if args.info:
            pfs.showinfo()
        return 2

    if args.info:
        pfs.showinfo()
    if args.list:
        list_objects(pfs)
    return 0


if __name__ == "__main__":
    sys.exit(main())
