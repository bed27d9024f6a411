"""Unit tests for the archive reader."""

import io
import unittest
import zipfile

from modbundle.archive import ArchiveEntry, BytesContentSource, read_archive
from modbundle.core.exceptions import ArchiveFormatError


class TestArchiveReader(unittest.TestCase):
    """Test cases for read_archive and lazy content sources."""

    def setUp(self):
        """Build a small wrapped archive in memory."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as zipf:
            zipf.writestr(zipfile.ZipInfo('repo-main/'), b'')
            zipf.writestr('repo-main/readme.txt', 'hello')
            zipf.writestr(zipfile.ZipInfo('repo-main/cfg/'), b'')
            zipf.writestr('repo-main/cfg/base.ini', '[base]')
        self.data = buffer.getvalue()

    def test_entries_keep_archive_order(self):
        entries = read_archive(self.data, source="test")
        self.assertEqual(
            [e.path for e in entries],
            ['repo-main/', 'repo-main/readme.txt', 'repo-main/cfg/', 'repo-main/cfg/base.ini'],
        )

    def test_directories_are_flagged_and_have_no_content(self):
        entries = read_archive(self.data)
        dirs = [e for e in entries if e.is_dir]
        self.assertEqual([e.path for e in dirs], ['repo-main/', 'repo-main/cfg/'])
        for entry in dirs:
            self.assertIsNone(entry.content)

    def test_content_is_read_on_demand(self):
        entries = read_archive(self.data, source="kit")
        readme = next(e for e in entries if e.path == 'repo-main/readme.txt')
        self.assertEqual(readme.content.source, "kit")
        self.assertEqual(readme.content.read_bytes(), b'hello')

    def test_garbage_raises_format_error(self):
        with self.assertRaises(ArchiveFormatError) as ctx:
            read_archive(b'this is not a zip file', source="https://example.test/bad.zip")
        self.assertEqual(ctx.exception.source, "https://example.test/bad.zip")
        self.assertIn("bad.zip", str(ctx.exception))

    def test_empty_input_raises_format_error(self):
        with self.assertRaises(ArchiveFormatError):
            read_archive(b'')

    def test_truncated_archive_raises_format_error(self):
        with self.assertRaises(ArchiveFormatError):
            read_archive(self.data[: len(self.data) // 2])

    def test_corrupt_member_fails_when_read(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_STORED) as zipf:
            zipf.writestr('wrap/data.bin', b'A' * 64)
        corrupted = buffer.getvalue().replace(b'A' * 64, b'B' * 64)

        entries = read_archive(corrupted, source="addon")
        with self.assertRaises(ArchiveFormatError):
            entries[0].content.read_bytes()

    def test_encrypted_member_fails_as_format_error(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_STORED) as zipf:
            zipf.writestr('wrap/secret.txt', b'hidden')
        data = bytearray(buffer.getvalue())
        # mark the member encrypted in the local and central headers
        local = data.find(b'PK\x03\x04')
        central = data.find(b'PK\x01\x02')
        data[local + 6] |= 0x01
        data[central + 8] |= 0x01

        entries = read_archive(bytes(data), source="addon")
        with self.assertRaises(ArchiveFormatError) as ctx:
            entries[0].content.read_bytes()
        self.assertEqual(ctx.exception.source, "addon")
        self.assertIn("wrap/secret.txt", str(ctx.exception))


def test_entry_repr_and_bytes_source():
    entry = ArchiveEntry("wrap/file.txt", False, BytesContentSource(b"x", source="mem"))
    assert "file" in repr(entry)
    assert entry.content.read_bytes() == b"x"
    assert entry.content.source == "mem"


def test_directory_entry_drops_content():
    entry = ArchiveEntry("wrap/dir/", True, BytesContentSource(b"ignored"))
    assert entry.content is None
