import numpy as np
import pytest

from eez_aquaculture.classify import (
    SuitabilityRange,
    classify,
    combine,
    suitable_cell_count,
)
from eez_aquaculture.errors import AlignmentError, ConfigurationError
from tests.conftest import make_grid


def test_boundary_values_are_suitable():
    grid = make_grid([[11.0, 30.0], [10.99, 30.01]])
    mask = classify(grid, 11, 30)
    assert mask.data[0, 0] == 1 and mask.data[0, 1] == 1
    assert np.isnan(mask.data[1, 0]) and np.isnan(mask.data[1, 1])


def test_nodata_input_stays_unsuitable():
    mask = classify(make_grid([[np.nan, 15.0]]), 0, 20)
    assert np.isnan(mask.data[0, 0])
    assert mask.data[0, 1] == 1


def test_widening_range_never_loses_cells():
    rng = np.random.default_rng(7)
    grid = make_grid(rng.uniform(-5, 40, size=(20, 20)))
    counts = [suitable_cell_count(classify(grid, 15 - w, 15 + w))
              for w in (0, 1, 2, 5, 10, 30)]
    assert counts == sorted(counts)
    assert counts[-1] == 400


def test_inverted_range_rejected():
    with pytest.raises(ConfigurationError):
        classify(make_grid([[1.0]]), 5, 1)
    with pytest.raises(ConfigurationError):
        SuitabilityRange(np.nan, 1)


def test_depth_sign_is_not_normalised():
    depth = make_grid([[-50.0, 50.0]])
    mask = classify(depth, -70, 0)
    assert mask.data[0, 0] == 1
    assert np.isnan(mask.data[0, 1])


def test_combine_is_commutative_and_idempotent():
    a = classify(make_grid([[1, 2], [3, 4]]), 1, 3)
    b = classify(make_grid([[1, 2], [3, 4]]), 2, 4)
    ab = combine([a, b]).data
    ba = combine([b, a]).data
    np.testing.assert_array_equal(ab, ba)
    np.testing.assert_array_equal(combine([a, a]).data, a.data)
    np.testing.assert_array_equal(ab, np.array([[np.nan, 1], [1, np.nan]]))


def test_combine_requires_aligned_masks():
    a = make_grid([[1.0, 1.0]])
    b = make_grid([[1.0, 1.0]], west=-100.0)
    with pytest.raises(AlignmentError):
        combine([a, b])
    with pytest.raises(ConfigurationError):
        combine([])


def test_oyster_ranges_on_two_by_two_grid():
    sst = make_grid([[11.0, 25.0], [31.0, 20.0]])
    depth = make_grid([[-70.0, -10.0], [-50.0, -100.0]])
    mask = combine([classify(sst, 11, 30), classify(depth, -70, 0)])
    expected = np.array([[1, 1], [np.nan, np.nan]], dtype=np.float32)
    np.testing.assert_array_equal(mask.data, expected)
    assert suitable_cell_count(mask) == 2
