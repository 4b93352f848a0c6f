"""Tests for full-image fixed-threshold segmentation."""

import numpy as np
import pytest
from PIL import Image

from reggrow import InvalidImageError, RegionGrowEngine, process_image_file, segment_all
from reggrow.grid import LabelGrid


def test_uniform_image_is_one_region(make_uniform):
    labels = segment_all(make_uniform(4, 4, (30, 60, 90)), threshold=10)
    assert labels.current_region == 1
    assert labels.count_with_id(1) == 16


def test_halves_merge_below_threshold(two_halves):
    labels = segment_all(two_halves, threshold=10)
    assert labels.current_region == 1
    assert labels.is_complete()


def test_halves_split_with_small_threshold(two_halves):
    labels = segment_all(two_halves, threshold=1)
    arr = labels.to_array()
    assert labels.current_region == 2
    assert (arr[:, :2] == 1).all()
    assert (arr[:, 2:] == 2).all()


def test_distance_equal_to_threshold_does_not_join(two_halves):
    # strict comparison: distance 5 with threshold 5 keeps the halves apart
    assert segment_all(two_halves, threshold=5).current_region == 2


def test_random_image_fully_labelled(random_image):
    for threshold in (0, 30, 80, 500):
        labels = segment_all(random_image, threshold)
        arr = labels.to_array()
        assert (arr > 0).all()
        distinct = np.unique(arr)
        assert len(distinct) == labels.current_region
        assert distinct.tolist() == list(range(1, labels.current_region + 1))


def test_non_positive_threshold_gives_one_region_per_pixel(make_uniform):
    labels = segment_all(make_uniform(3, 5, (1, 2, 3)), threshold=0)
    assert labels.current_region == 15


def test_diagonal_neighbours_are_connected():
    img = np.zeros((3, 3, 3), dtype=np.uint8)
    img[0, 0] = img[1, 1] = img[2, 2] = (200, 10, 10)
    img[0, 1:] = (10, 200, 10)
    img[1, 0] = img[1, 2] = img[2, :2] = (10, 200, 10)
    labels = segment_all(img, threshold=1).to_array()
    assert labels[0, 0] == labels[1, 1] == labels[2, 2]
    # the off-diagonal cells also touch diagonally
    assert labels[0, 1] == labels[1, 2]


def test_cells_are_never_relabelled(random_image, monkeypatch):
    seen = {}
    original_set = LabelGrid.set

    def recording_set(self, row, col, region_id):
        assert (row, col) not in seen, f"cell {(row, col)} labelled twice"
        seen[(row, col)] = region_id
        original_set(self, row, col, region_id)

    monkeypatch.setattr(LabelGrid, "set", recording_set)
    labels = segment_all(random_image, threshold=60)
    assert len(seen) == labels.size
    arr = labels.to_array()
    for (row, col), region_id in seen.items():
        assert arr[row, col] == region_id


def test_every_pixel_popped_once(random_image):
    engine = RegionGrowEngine(random_image)
    engine.segment_all(40)
    assert engine.iterations == random_image.shape[0] * random_image.shape[1]
    assert engine.frontier.is_empty()


def test_engine_runs_are_independent(two_halves):
    engine = RegionGrowEngine(two_halves)
    assert engine.segment_all(1).current_region == 2
    assert engine.segment_all(10).current_region == 1
    assert engine.current_region == 1


def test_float_images_supported():
    img = np.zeros((2, 2, 3), dtype=np.float32)
    img[:, 1] = 0.5
    assert segment_all(img, threshold=0.1).current_region == 2


@pytest.mark.parametrize("shape", [(4, 4), (4, 4, 4), (0, 3, 3), (3, 0, 3)])
def test_malformed_images_rejected(shape):
    with pytest.raises(InvalidImageError):
        RegionGrowEngine(np.zeros(shape, dtype=np.uint8))


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_non_finite_threshold_rejected(two_halves, bad):
    with pytest.raises(ValueError):
        segment_all(two_halves, bad)


@pytest.fixture
def red_blue_file(tmp_path):
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:, :8] = (200, 30, 30)
    img[:, 8:] = (30, 30, 200)
    path = tmp_path / "red_blue.png"
    Image.fromarray(img).save(path)
    return str(path)


def test_process_image_file_full_image(red_blue_file):
    labels = process_image_file(red_blue_file, 10)
    assert labels.dtype == np.int32
    assert labels.shape == (10, 10)
    assert (labels[:, :8] == 1).all()
    assert (labels[:, 8:] == 2).all()


def test_process_image_file_with_seeds(red_blue_file):
    labels = process_image_file(red_blue_file, 5, seeds=[(0, 0)])
    # the 80-pixel red block meets the minimum size, the blue strip is never seeded
    assert (labels[:, :8] == 1).all()
    assert (labels[:, 8:] == 0).all()
