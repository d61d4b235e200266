"""Tests for the BinaryReader class."""

import struct

import pytest

from dvdti.ifo.errors import IfoError, TruncatedDataError
from dvdti.ifo.reader import BinaryReader, bcd, trim_field


class TestPrimitiveReads:
    """Test u8, u16, u32, u64 big-endian reads."""

    def test_u8(self) -> None:
        r = BinaryReader(b"\xab")
        assert r.u8() == 0xAB

    def test_u16(self) -> None:
        r = BinaryReader(struct.pack(">H", 0xBEEF))
        assert r.u16() == 0xBEEF

    def test_u32(self) -> None:
        r = BinaryReader(struct.pack(">I", 0xDEADBEEF))
        assert r.u32() == 0xDEADBEEF

    def test_u64(self) -> None:
        r = BinaryReader(struct.pack(">Q", 0x0102030405060708))
        assert r.u64() == 0x0102030405060708


class TestBcd:
    def test_bcd_values(self) -> None:
        assert bcd(0x12) == 12
        assert bcd(0x99) == 99
        assert bcd(0x00) == 0

    def test_cursor_bcd(self) -> None:
        r = BinaryReader(b"\x45\x07")
        assert r.bcd() == 45
        assert r.bcd() == 7
        assert r.remaining == 0


class TestAbsoluteReads:
    """Absolute reads never move the cursor."""

    def test_u16_at_and_u32_at(self) -> None:
        r = BinaryReader(b"\x00\x00\x01\x02\x00\x00\x00\x09")
        assert r.u16_at(2) == 0x0102
        assert r.u32_at(4) == 9
        assert r.tell() == 0

    def test_u64_at(self) -> None:
        r = BinaryReader(b"\xff" + struct.pack(">Q", 42))
        assert r.u64_at(1) == 42

    def test_bytes_and_string_at(self) -> None:
        r = BinaryReader(b"xxDVDVIDEO-VMG")
        assert r.bytes_at(2, 12) == b"DVDVIDEO-VMG"
        assert r.string_at(2, 3) == "DVD"

    def test_read_past_end_raises(self) -> None:
        r = BinaryReader(b"\x00\x01\x02")
        with pytest.raises(TruncatedDataError):
            r.u32_at(0)
        with pytest.raises(TruncatedDataError):
            r.u8_at(3)


class TestReadBytesAndString:
    """Test read_bytes and read_string."""

    def test_read_bytes(self) -> None:
        r = BinaryReader(b"\x01\x02\x03\x04")
        assert r.read_bytes(3) == b"\x01\x02\x03"
        assert r.read_bytes(1) == b"\x04"

    def test_read_string_is_untrimmed(self) -> None:
        r = BinaryReader(b"AB\x00\x00 ")
        assert r.read_string(5) == "AB\x00\x00 "

    def test_trim_field(self) -> None:
        assert trim_field("STUDIO  \x00\x00") == "STUDIO"
        assert trim_field("\x00\x00") == ""


class TestCursor:
    """Test seek, tell, skip."""

    def test_tell_advances_after_read(self) -> None:
        r = BinaryReader(b"\x00" * 10)
        r.u8()
        assert r.tell() == 1
        r.u16()
        assert r.tell() == 3

    def test_seek_and_skip(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03")
        r.seek(1)
        r.skip(1)
        assert r.u8() == 0x02

    def test_seek_out_of_range_raises(self) -> None:
        r = BinaryReader(b"\x00\x01")
        with pytest.raises(TruncatedDataError):
            r.seek(10)

    def test_truncation_is_a_value_error(self) -> None:
        r = BinaryReader(b"\x00")
        with pytest.raises(ValueError):
            r.u16()
        assert issubclass(TruncatedDataError, IfoError)


class TestSlice:
    """Test slice creates a sub-reader."""

    def test_slice_basic(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        child: BinaryReader = r.slice(2, 3)
        assert child.remaining == 3
        assert child.tell() == 0
        assert child.read_bytes(3) == b"\x02\x03\x04"

    def test_slice_independent_of_parent(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        child: BinaryReader = r.slice(1, 2)
        child.u8()
        assert r.tell() == 0

    def test_slice_from_runs_to_end(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03")
        child = r.slice_from(1)
        assert child.size == 3
        assert child.u8_at(0) == 0x01

    def test_slice_from_past_end_raises(self) -> None:
        r = BinaryReader(b"\x00\x01")
        with pytest.raises(TruncatedDataError):
            r.slice_from(5)

    def test_child_reads_bounded(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03")
        child = r.slice(0, 2)
        with pytest.raises(TruncatedDataError):
            child.u8_at(2)


class TestGuards:
    """Test require and require_at."""

    def test_require_raises_when_not_enough_bytes(self) -> None:
        r = BinaryReader(b"\x00\x01")
        with pytest.raises(TruncatedDataError, match="need 5 bytes"):
            r.require(5)

    def test_require_at_raises_for_out_of_bounds(self) -> None:
        r = BinaryReader(b"\x00\x01\x02")
        with pytest.raises(TruncatedDataError):
            r.require_at(2, 5)

    def test_require_at_ok_within_bounds(self) -> None:
        r = BinaryReader(b"\x00\x01\x02\x03")
        r.require_at(1, 2)  # Should not raise


class TestFileSource:
    def test_reads_whole_file(self, tmp_path) -> None:
        p = tmp_path / "VIDEO_TS.IFO"
        p.write_bytes(b"\x00\x2a")
        with BinaryReader(p) as r:
            assert r.path == str(p)
            assert r.u16() == 42
