import bz2
import gzip
import io
import os
import tarfile
import zipfile

import pytest

from core.decoders import Bzip2Decoder, GzipDecoder, TarDecoder, ZipDecoder
from core.decoders.registry import decoder_for, split_stages, stages_for
from core.errors import CorruptStreamError, MalformedHeaderError, UnsupportedFormatError
from core.models import ArchiveMember, FormatTag, Stage


def make_tar(entries):
    """entries: (name, data) for files, (name, None) for directories"""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode='w') as tar:
        for name, data in entries:
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def read_all(stream, chunk_size=4096):
    parts = []
    while chunk := stream.read(chunk_size):
        parts.append(chunk)
    return b''.join(parts)


class NonSeekable(io.RawIOBase):
    def __init__(self, data):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, b):
        data = self._buf.read(len(b))
        b[:len(data)] = data
        return len(data)


# ── Compression ────────────────────────────────────────────────────────────

def test_gzip_round_trip():
    payload = os.urandom(200_000)
    stream = GzipDecoder().open(io.BytesIO(gzip.compress(payload)))
    assert read_all(stream) == payload


def test_bzip2_round_trip():
    payload = b"line of text\n" * 20_000
    stream = Bzip2Decoder().open(io.BytesIO(bz2.compress(payload)))
    assert read_all(stream) == payload


def test_gzip_bad_deflate_data_is_corrupt():
    data = b'\x1f\x8b\x08\x00' + b'\x00' * 6 + b'\xff' * 64
    stream = GzipDecoder().open(io.BytesIO(data))
    with pytest.raises(CorruptStreamError):
        stream.read()


def test_gzip_truncated_stream_is_corrupt():
    data = gzip.compress(os.urandom(10_000))[:-20]
    stream = GzipDecoder().open(io.BytesIO(data))
    with pytest.raises(CorruptStreamError):
        read_all(stream)


def test_bzip2_bad_header_is_corrupt():
    stream = Bzip2Decoder().open(io.BytesIO(b'BZh9' + b'\x00' * 64))
    with pytest.raises(CorruptStreamError):
        stream.read()


# ── Tar ────────────────────────────────────────────────────────────────────

def test_tar_members_in_order_with_bounded_readers():
    data = make_tar([
        ("docs", None),
        ("docs/a.txt", b"alpha"),
        ("b.bin", b"\x00\x01\x02"),
    ])
    seen = []
    for member, reader in TarDecoder().members(io.BytesIO(data)):
        seen.append((member, reader.read()))

    assert seen == [
        (ArchiveMember("docs", 0, is_dir=True), b""),
        (ArchiveMember("docs/a.txt", 5), b"alpha"),
        (ArchiveMember("b.bin", 3), b"\x00\x01\x02"),
    ]


def test_tar_stops_at_terminator_blocks():
    data = make_tar([("one.txt", b"1"), ("two.txt", b"2")])
    data += b"\xffthis is not a header" * 200

    names = [m.name for m, _ in TarDecoder().members(io.BytesIO(data))]
    assert names == ["one.txt", "two.txt"]


def test_tar_reads_from_non_seekable_stream():
    data = make_tar([("a.txt", b"abc"), ("b.txt", b"def")])
    contents = [r.read() for _, r in TarDecoder().members(NonSeekable(data))]
    assert contents == [b"abc", b"def"]


def test_tar_listing_skips_unread_members():
    data = make_tar([("a.txt", b"a" * 3000), ("b.txt", b"b" * 10)])
    members = [m for m, _ in TarDecoder().members(io.BytesIO(data))]
    assert [(m.name, m.size) for m in members] == [("a.txt", 3000), ("b.txt", 10)]


def test_tar_garbage_header_is_malformed():
    with pytest.raises(MalformedHeaderError):
        list(TarDecoder().members(io.BytesIO(b"x" * 1024)))


def test_tar_bad_header_after_first_member_is_malformed():
    data = bytearray(make_tar([("one.txt", b"1"), ("two.txt", b"2"), ("three.txt", b"3")]))
    # Second header starts after the first header and its single data block
    data[1024] = ord('X')

    seen = []
    with pytest.raises(MalformedHeaderError):
        for member, reader in TarDecoder().members(io.BytesIO(bytes(data))):
            seen.append(member.name)
            reader.read()
    assert seen == ["one.txt"]


def test_tar_truncated_member_is_malformed():
    data = make_tar([("big.txt", b"z" * 4000)])[:512 + 1000]
    with pytest.raises(MalformedHeaderError):
        for _, reader in TarDecoder().members(io.BytesIO(data)):
            read_all(reader)


def test_tar_over_gzip_layer():
    data = gzip.compress(make_tar([("inner.txt", b"inside")]))
    stream = GzipDecoder().open(io.BytesIO(data))
    pairs = [(m.name, r.read()) for m, r in TarDecoder().members(stream)]
    assert pairs == [("inner.txt", b"inside")]


# ── Zip ────────────────────────────────────────────────────────────────────

def make_zip():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w') as zf:
        zf.writestr("docs/", b"")
        zf.writestr("docs/a.txt", b"deflated " * 100, compress_type=zipfile.ZIP_DEFLATED)
        zf.writestr("b.txt", b"hello world", compress_type=zipfile.ZIP_STORED)
    return buf.getvalue()


def test_zip_lists_central_directory_once_with_uncompressed_sizes():
    members = [m for m, _ in ZipDecoder().members(io.BytesIO(make_zip()))]
    assert members == [
        ArchiveMember("docs/", 0, is_dir=True),
        ArchiveMember("docs/a.txt", 900),
        ArchiveMember("b.txt", 11),
    ]


def test_zip_readers_decode_stored_and_deflated():
    contents = {
        m.name: r.read()
        for m, r in ZipDecoder().members(io.BytesIO(make_zip()))
        if not m.is_dir
    }
    assert contents == {"docs/a.txt": b"deflated " * 100, "b.txt": b"hello world"}


def test_zip_requires_seekable_source():
    with pytest.raises(UnsupportedFormatError):
        list(ZipDecoder().members(NonSeekable(make_zip())))


def test_zip_without_central_directory_is_malformed():
    with pytest.raises(MalformedHeaderError):
        list(ZipDecoder().members(io.BytesIO(b'PK\x03\x04' + b'\x00' * 100)))


def test_zip_crc_mismatch_is_corrupt():
    data = make_zip().replace(b"hello world", b"hellO world")
    with pytest.raises(CorruptStreamError):
        for member, reader in ZipDecoder().members(io.BytesIO(data)):
            if member.name == "b.txt":
                reader.read()


# ── Registry ───────────────────────────────────────────────────────────────

def test_every_tag_has_a_stage_list():
    assert stages_for(FormatTag.UNKNOWN) == ()
    assert stages_for(FormatTag.PLAIN_GZIP) == (Stage.GZIP,)
    assert stages_for(FormatTag.PLAIN_BZIP2) == (Stage.BZIP2,)
    assert stages_for(FormatTag.ZIP) == (Stage.ZIP,)
    assert stages_for(FormatTag.TAR) == (Stage.TAR,)
    assert stages_for(FormatTag.TAR_GZIP) == (Stage.GZIP, Stage.TAR)
    assert stages_for(FormatTag.TAR_BZIP2) == (Stage.BZIP2, Stage.TAR)
    for tag in FormatTag:
        assert 0 <= len(stages_for(tag)) <= 2


def test_split_stages_pairs_compression_with_archive():
    compression, archive = split_stages(stages_for(FormatTag.TAR_BZIP2))
    assert isinstance(compression, Bzip2Decoder)
    assert isinstance(archive, TarDecoder)

    assert split_stages(()) == (None, None)
    assert decoder_for(Stage.ZIP) is split_stages((Stage.ZIP,))[1]
