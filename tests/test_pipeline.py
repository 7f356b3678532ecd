#!/usr/bin/env python3
"""
Batch pipeline - detection + slicing per image, partial failures
"""

from stripcutter.config import DetectionParams, SliceConfig
from stripcutter.image_utils import encode_image
from stripcutter.pipeline import (
    STATUS_DONE,
    STATUS_ERROR,
    process_batch,
    process_file,
    process_image,
)

from conftest import noise_image

PARAMS = DetectionParams(sensitivity=50, fast_mode=False, min_segment_height=20)


def test_process_image(banded_image):
    record = process_image(banded_image, "strip.png", PARAMS, SliceConfig(image_format=".png"))
    assert record.status == STATUS_DONE
    assert (record.width, record.height) == (100, 300)
    assert len(record.split_points) == 1
    assert sum(s.height for s in record.segments) == 300
    assert all(s.data for s in record.segments)


def test_manual_cuts_skip_detection(banded_image):
    record = process_image(banded_image, "strip.png", PARAMS, cuts=[250, 50])
    assert record.split_points == [50, 250]
    assert [s.height for s in record.segments] == [50, 200, 50]


def test_detect_only(banded_image):
    record = process_image(banded_image, "strip.png", PARAMS, slice_segments=False)
    assert record.segments == []
    assert record.split_points


def test_selected_segments(banded_image):
    record = process_image(banded_image, "strip.png", PARAMS, cuts=[100, 200])
    record.segments[1].selected = False
    assert [s.index for s in record.selected_segments] == [0, 2]


def test_missing_file_is_an_error_record(tmp_path):
    record = process_file(tmp_path / "nope.png", PARAMS)
    assert record.status == STATUS_ERROR
    assert "nope.png" in record.error_message
    assert record.segments == []


def test_batch_keeps_order_and_survives_bad_input(tmp_path):
    good = []
    for i in range(3):
        img = noise_image(80, 240, seed=i)
        img[120:124, :, :3] = 255
        path = tmp_path / f"page{i}.png"
        path.write_bytes(encode_image(img, ".png"))
        good.append(path)
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"garbage")

    records = process_batch([good[0], bad, good[1], good[2]], PARAMS, SliceConfig(), max_workers=3)
    assert [r.name for r in records] == ["page0.png", "broken.png", "page1.png", "page2.png"]
    assert [r.status for r in records] == [STATUS_DONE, STATUS_ERROR, STATUS_DONE, STATUS_DONE]
    for r in records:
        if r.status == STATUS_DONE:
            assert r.split_points == [120]
            assert [s.height for s in r.segments] == [120, 120]


def test_empty_batch():
    assert process_batch([]) == []


def test_manual_cuts_are_clamped_and_deduplicated():
    img = noise_image(40, 100)
    record = process_image(img, "strip.png", PARAMS, cuts=[-20, 50, 50, 400])
    assert record.split_points == [0, 50]
    assert [s.height for s in record.segments] == [50, 50]


def test_opencv_failure_marks_only_that_image(tmp_path, monkeypatch):
    import cv2
    import stripcutter.pipeline as pipeline_module

    paths = []
    for i in range(2):
        img = noise_image(60, 120, seed=i)
        img[0, 0, :3] = 0 if i == 0 else 255
        path = tmp_path / f"page{i}.png"
        path.write_bytes(encode_image(img, ".png"))
        paths.append(path)

    class BrokenDetector:
        def __init__(self, params=None):
            pass

        def detect(self, image):
            if image[0, 0, 0] == 0:
                raise cv2.error("resize failed")
            return []

    monkeypatch.setattr(pipeline_module, "SeamDetector", BrokenDetector)

    records = process_batch(paths, PARAMS, SliceConfig(), max_workers=2)
    assert [r.status for r in records] == [STATUS_ERROR, STATUS_DONE]
    assert "resize failed" in records[0].error_message
