import os

import pytest

from media_inspector.core.identity import identity_of, signature_of


def test_identity_is_canonical_absolute_path(media_file, monkeypatch):
    media_dir = os.path.dirname(media_file)
    monkeypatch.chdir(media_dir)

    assert identity_of("sample.mp4") == os.path.realpath(media_file)
    assert identity_of(os.path.join("..", "media", ".", "sample.mp4")) == os.path.realpath(media_file)


def test_symlink_resolves_to_target(media_file, tmp_path):
    link = tmp_path / "link.mp4"
    os.symlink(media_file, link)
    assert identity_of(str(link)) == identity_of(media_file)


def test_identity_of_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        identity_of(str(tmp_path / "nope.mp4"))


def test_signature_is_size_and_whole_second_mtime(media_file):
    os.utime(media_file, (1700000000.75, 1700000000.75))
    assert signature_of(media_file) == "2048-1700000000"


def test_signature_changes_with_size_and_mtime(media_file):
    os.utime(media_file, (1700000000, 1700000000))
    before = signature_of(media_file)

    with open(media_file, "ab") as f:
        f.write(b"\x01")
    os.utime(media_file, (1700000000, 1700000000))
    assert signature_of(media_file) != before

    grown = signature_of(media_file)
    os.utime(media_file, (1700000100, 1700000100))
    assert signature_of(media_file) != grown


def test_signature_of_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        signature_of(str(tmp_path / "gone.mp4"))
