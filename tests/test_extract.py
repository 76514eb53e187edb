import struct
import unittest

from pfs_extractor import extract, PFSFile
from pfs_extractor.chunks import COLLECTING
from pfs_extractor.errors import (
    Report, TooSmall, Truncated, TooDeep, UnsupportedVersion, WriteFailed,
    NameTooLong, FooterMagicMismatch, UnknownVersionTag,
)
from pfs_extractor.generator.pfs import (
    PFSFileGenerator, PFSSectionGenerator, PFSSubsectionGenerator,
    chunk_data,
)
from pfs_extractor.router import section_name
from pfs_extractor.sink import MemorySink
from pfs_extractor.utils import flatten_firmware_objects

VERSION = (('A', 1), ('N', 2))


class FailingSink(MemorySink):
    '''Refuses every name ending in suffix.'''

    def __init__(self, suffix):
        MemorySink.__init__(self)
        self.suffix = suffix

    def write(self, name, data):
        if name.endswith(self.suffix):
            raise WriteFailed(name, "refused")
        MemorySink.write(self, name, data)


class LabelReport(Report):
    '''Remembers the label each warning was reported with.'''

    def __init__(self):
        Report.__init__(self, quiet=True)
        self.labels = []

    def warn(self, warning, label=""):
        Report.warn(self, warning, label)
        self.labels.append(label)


class ExtractTest(unittest.TestCase):

    def setUp(self):
        self.report = Report(quiet=True)
        self.sink = MemorySink()

    def _extract(self, output, **kwargs):
        return extract(output, self.sink, report=self.report, **kwargs)

    def test_all_blocks(self):
        sections = [
            PFSSectionGenerator(
                data=b"D0", signature=b"S0", metadata=b"M0",
                metadata_signature=b"T0", version=VERSION),
            PFSSectionGenerator(data=b"D1", metadata=b"M1",
                                version=(('N', 7),)),
            PFSSectionGenerator(version=((' ', 0),)),
            PFSSectionGenerator(signature=b"S3", version=((0, 0),)),
        ]
        pfs = self._extract(PFSFileGenerator(sections).output)

        self.assertEqual(len(pfs.sections), 4)
        self.assertEqual(self.sink.writes, [
            ("section_0_1.2.data", b"D0"),
            ("section_0_1.2.sign", b"S0"),
            ("section_0_1.2.meta", b"M0"),
            ("section_0_1.2.mtsg", b"T0"),
            ("section_1_7.data", b"D1"),
            ("section_1_7.meta", b"M1"),
            ("section_3_.sign", b"S3"),
        ])
        self.assertEqual(self.report.warnings, [])
        self.assertEqual(self.report.errors, [])

    def test_too_small_writes_nothing(self):
        output = PFSFileGenerator(
            [PFSSectionGenerator(data=b"data")], data_size=0x200).output
        with self.assertRaises(TooSmall):
            self._extract(output)
        self.assertEqual(self.sink.writes, [])

    def test_truncated_section(self):
        sections = [
            PFSSectionGenerator(data=b"first"),
            PFSSectionGenerator(data=b"\x00" * 8, sizes=[0x1000, 0, 0, 0]),
            PFSSectionGenerator(data=b"never"),
        ]
        with self.assertRaises(Truncated):
            self._extract(PFSFileGenerator(sections).output)
        self.assertEqual(self.sink.names, ["section_0_1.2.data"])

    def test_truncated_first_section(self):
        sections = [PFSSectionGenerator(data=b"\x00", sizes=[1, 0, 0, 0x40])]
        with self.assertRaises(Truncated):
            self._extract(PFSFileGenerator(sections).output)
        self.assertEqual(self.sink.writes, [])

    def test_footer_magic_mismatch(self):
        sections = [PFSSectionGenerator(data=b"a"),
                    PFSSectionGenerator(data=b"b")]
        output = PFSFileGenerator(sections, footer_magic=b"PFS.XXX.").output
        self._extract(output)
        self.assertEqual(len(self.sink.writes), 2)
        self.assertEqual(len(self.report.warnings), 1)
        self.assertIsInstance(self.report.warnings[0], FooterMagicMismatch)

    def test_unknown_version_tag(self):
        sections = [PFSSectionGenerator(data=b"a", version=(('X', 5),
                                                            ('A', 3)))]
        self._extract(PFSFileGenerator(sections).output)
        self.assertEqual(self.sink.names, ["section_0_3.data"])
        self.assertTrue(self.report.has(UnknownVersionTag))

    def test_nested_subsection(self):
        nested = PFSSubsectionGenerator(
            [(2, b"!"), (0, b"hello "), (1, b"world")]).output
        sections = [
            PFSSectionGenerator(data=nested, signature=b"SIG",
                                version=VERSION),
            PFSSectionGenerator(data=b"after"),
        ]
        pfs = self._extract(PFSFileGenerator(sections).output)

        self.assertEqual(self.sink.names, [
            "section_0_1.2.data",
            "section_0_1.2.payload",
            "section_0_1.2.sign",
            "section_1_1.2.data",
        ])
        self.assertEqual(self.sink.get("section_0_1.2.data"), nested)
        self.assertEqual(
            self.sink.get("section_0_1.2.payload"), b"hello world!")

        subsection = pfs.sections[0].nested
        self.assertIsInstance(subsection, PFSFile)
        self.assertTrue(subsection.is_subsection)
        self.assertEqual(subsection.depth, 1)
        self.assertEqual(len(subsection.sections), 3)
        self.assertEqual(subsection.reassembler.partitions, 3)

    def test_nested_failure_keeps_data(self):
        broken = b"PFS.HDR." + struct.pack("<II", 2, 0) + b"\x00" * 0x10
        sections = [PFSSectionGenerator(data=broken),
                    PFSSectionGenerator(data=b"next")]
        self._extract(PFSFileGenerator(sections).output)

        self.assertEqual(self.sink.names,
                         ["section_0_1.2.data", "section_1_1.2.data"])
        self.assertEqual(len(self.report.errors), 1)
        self.assertIsInstance(self.report.errors[0], UnsupportedVersion)

    def test_nested_short_chunk(self):
        nested = PFSFileGenerator(
            [PFSSectionGenerator(data=b"\x00" * 0x10)]).output
        self._extract(PFSFileGenerator(
            [PFSSectionGenerator(data=nested)]).output)
        self.assertEqual(self.sink.names, ["section_0_1.2.data"])
        self.assertTrue(self.report.has(Truncated))

    def test_subsection_truncated_after_chunk(self):
        nested = PFSFileGenerator([
            PFSSectionGenerator(data=chunk_data(0, b"A")),
            PFSSectionGenerator(data=b"\x00" * 4, sizes=[0x1000, 0, 0, 0]),
        ]).output
        pfs = self._extract(PFSFileGenerator(
            [PFSSectionGenerator(data=nested)]).output)

        self.assertEqual(self.sink.names, ["section_0_1.2.data"])
        self.assertTrue(self.report.has(Truncated))
        reassembler = pfs.sections[0].nested.reassembler
        self.assertEqual(reassembler.state, COLLECTING)
        self.assertIsNone(reassembler.payload)

    def test_subsection_version_warning_label(self):
        nested = PFSFileGenerator([
            PFSSectionGenerator(data=chunk_data(0, b"A"),
                                version=(('X', 1),)),
        ]).output
        report = LabelReport()
        extract(PFSFileGenerator([PFSSectionGenerator(data=nested)]).output,
                self.sink, report=report)

        self.assertEqual(len(report.warnings), 1)
        self.assertIsInstance(report.warnings[0], UnknownVersionTag)
        self.assertEqual(report.labels, ["section_0_1.2.payload: "])
        self.assertEqual(self.sink.get("section_0_1.2.payload"), b"A")

    def test_max_depth(self):
        nested = PFSSubsectionGenerator([(0, b"payload")]).output
        output = PFSFileGenerator([PFSSectionGenerator(data=nested)]).output
        self._extract(output, max_depth=0)
        self.assertEqual(self.sink.names, ["section_0_1.2.data"])
        self.assertTrue(self.report.has(TooDeep))

    def test_too_deep_top_level(self):
        output = PFSFileGenerator([PFSSectionGenerator(data=b"a")]).output
        with self.assertRaises(TooDeep):
            self._extract(output, depth=33)
        self.assertEqual(self.sink.writes, [])

    def test_subsection_mode(self):
        output = PFSSubsectionGenerator([(1, b"B"), (0, b"A")]).output
        self._extract(output, target="rebuilt")
        self.assertEqual(self.sink.writes, [("rebuilt", b"AB")])

    def test_sink_failure_continues(self):
        sink = FailingSink("sign")
        sections = [
            PFSSectionGenerator(data=b"a", signature=b"b", metadata=b"c"),
            PFSSectionGenerator(data=b"d", signature=b"e"),
        ]
        extract(PFSFileGenerator(sections).output, sink, report=self.report)
        self.assertEqual(sink.names, ["section_0_1.2.data",
                                      "section_0_1.2.meta",
                                      "section_1_1.2.data"])
        self.assertEqual(len(self.report.errors), 2)
        self.assertIsInstance(self.report.errors[0], WriteFailed)

    def test_section_name_limit(self):
        self.assertEqual(section_name(3, "1.2.", "data"), "section_3_1.2.data")
        with self.assertRaises(NameTooLong):
            section_name(3, "1." * 200, "data")

    def test_iterate_objects(self):
        nested = PFSSubsectionGenerator([(0, b"x")]).output
        sections = [PFSSectionGenerator(data=nested, metadata=b"meta")]
        pfs = self._extract(PFSFileGenerator(sections).output)

        objects = flatten_firmware_objects(pfs.iterate_objects())
        types = [_object["type"] for _object in objects]
        self.assertEqual(types, ["PFSSection", "PFSFile", "PFSSection",
                                 "RawObject", "RawObject"])
        self.assertEqual(objects[0]["attrs"]["version"], "1.2.")
        self.assertEqual(objects[1]["label"], "section_0_1.2.payload")
        self.assertEqual(objects[1]["attrs"]["payload_size"], 1)
        self.assertIs(objects[1]["parent"], objects[0])


if __name__ == '__main__':
    unittest.main()
