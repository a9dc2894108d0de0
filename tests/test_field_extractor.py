import pytest

from media_inspector.core.field_extractor import extract
from media_inspector.models.field_row import FieldRow
from media_inspector.models.probe_record import ProbeRecord

from conftest import ffprobe_payload, make_record


def test_extract_full_record(record):
    row = extract("/videos/sample.mp4", record)
    assert row == FieldRow(
        "sample.mp4", "1.40 GB", "01:00:00", "23.98", "3.33 Mbps",
        "1920x1080", "h264", "High", "8bit", "2CH 128k",
    )


def test_audio_only_record_keeps_size_and_duration():
    row = extract("/music/sample.m4a", make_record(video=False))
    assert list(row) == ["sample.m4a", "1.40 GB", "01:00:00", "", "", "", "", "", "", "2CH 128k"]


def test_missing_audio_stream_leaves_audio_empty():
    row = extract("clip.mkv", make_record(audio=False))
    assert row.audio == ""
    assert row.codec == "h264"


def test_first_stream_of_each_type_wins():
    payload = ffprobe_payload()
    payload["streams"].append({"codec_type": "video", "codec_name": "mjpeg", "width": 320, "height": 240})
    payload["streams"].append({"codec_type": "audio", "codec_name": "ac3", "channels": 6})
    row = extract("movie.mkv", ProbeRecord.model_validate(payload))
    assert row.codec == "h264"
    assert row.resolution == "1920x1080"
    assert row.audio == "2CH 128k"


def test_missing_optional_fields_fall_back():
    payload = ffprobe_payload(bit_rate=None)
    video = payload["streams"][0]
    for key in ("width", "profile", "pix_fmt", "r_frame_rate"):
        del video[key]
    del payload["streams"][1]["bit_rate"]

    row = extract("odd.ts", ProbeRecord.model_validate(payload))
    assert row.fps == ""
    assert row.bitrate == ""
    assert row.resolution == "0x1080"
    assert row.profile == ""
    assert row.depth == "8bit"
    assert row.audio == "2CH"


def test_unparseable_container_values_become_empty():
    row = extract("broken.mp4", make_record(size="N/A", duration="N/A"))
    assert row.size == ""
    assert row.duration == ""


def test_ten_bit_source():
    payload = ffprobe_payload()
    payload["streams"][0]["pix_fmt"] = "yuv420p10le"
    payload["streams"][0]["codec_name"] = "hevc"
    payload["streams"][0]["profile"] = "Main 10"
    row = extract("hdr.mkv", ProbeRecord.model_validate(payload))
    assert (row.codec, row.profile, row.depth) == ("hevc", "Main 10", "10bit")


def test_filename_is_middle_truncated(record):
    name = "A.Very.Long.Movie.Title.2160p.UHD.BluRay.x265.mkv"
    row = extract(f"/videos/{name}", record, filename_length=20)
    assert row.filename == "A.Very.Lo...x265.mkv"
    assert len(row.filename) == 20


def test_row_is_immutable(record):
    row = extract("sample.mp4", record)
    with pytest.raises(AttributeError):
        row.size = "0 B"


def test_undecodable_bytes_in_name_are_replaced(record):
    row = extract("/videos/bad\udcff.mp4", record)
    assert row.filename == "bad\ufffd.mp4"
