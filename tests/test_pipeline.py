import matplotlib.pyplot as plt
import numpy as np
import pytest

from eez_aquaculture import OYSTER, compute_for_species, compute_suitability
from eez_aquaculture.area import total_suitable_area
from eez_aquaculture.classify import SuitabilityRange
from eez_aquaculture.errors import ConfigurationError, InputLoadError
from eez_aquaculture.pipeline import SuitabilityInputs, prepare_layers, score_layers


@pytest.fixture
def layers(data_dir):
    return prepare_layers(SuitabilityInputs.from_dir(data_dir), verbose=False)


def test_prepare_layers_aligns_everything(layers):
    assert layers.sst.shape == (4, 4)
    assert layers.depth.same_grid(layers.sst)
    assert layers.region_raster.same_grid(layers.sst)
    assert layers.n_years == 5
    np.testing.assert_allclose(layers.sst.data[0], [10, 15, 15, 35], atol=1e-3)
    assert layers.depth.data[1, 1] == -100
    assert [r.key for r in layers.regions] == ["A", "B"]


def test_oyster_run_counts_cells_per_region(layers):
    run = score_layers(layers, OYSTER.temp_range, OYSTER.depth_range, "Oysters",
                       verbose=False)
    expected = np.ones((4, 4), dtype=np.float32)
    for r, c in [(0, 0), (0, 3), (1, 1), (2, 3)]:
        expected[r, c] = np.nan
    np.testing.assert_array_equal(run.suitability.data, expected)

    west = ~np.isnan(expected) & (np.arange(4) < 2)
    area = layers.cell_area.data
    assert run.reports["A"].suitable_area_km2 == pytest.approx(area[west].sum(), rel=1e-6)
    assert run.reports["A"].name == "West Block"

    total = sum(r.suitable_area_km2 for r in run.reports.values())
    assert total == pytest.approx(total_suitable_area(run.suitability, layers.cell_area))


def test_each_run_leaves_layers_untouched(layers):
    before = layers.sst.data.copy()
    score_layers(layers, SuitabilityRange(0, 12), SuitabilityRange(-200, 0), verbose=False)
    score_layers(layers, SuitabilityRange(14, 40), SuitabilityRange(-50, 10), verbose=False)
    np.testing.assert_array_equal(layers.sst.data, before)


def test_compute_suitability_end_to_end(data_dir, capsys):
    report, area_fig, pct_fig = compute_suitability(
        11, 30, -70, 0, "Oysters", inputs=SuitabilityInputs.from_dir(data_dir))
    try:
        lines = report.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("Suitable area for Oysters in West Block:")
        assert "[6/6] Rendering maps" in capsys.readouterr().out
    finally:
        plt.close(area_fig)
        plt.close(pct_fig)


def test_compute_for_species_matches_explicit_call(data_dir):
    inputs = SuitabilityInputs.from_dir(data_dir)
    report, *figs = compute_for_species(OYSTER, inputs=inputs, verbose=False)
    explicit, *more = compute_suitability(11, 30, -70, 0, "Oysters",
                                          inputs=inputs, verbose=False)
    for fig in figs + more:
        plt.close(fig)
    assert report == explicit


def test_inverted_range_fails_before_loading(tmp_path):
    inputs = SuitabilityInputs.from_dir(tmp_path / "missing")
    with pytest.raises(ConfigurationError):
        compute_suitability(30, 11, -70, 0, "Oysters", inputs=inputs)
    with pytest.raises(ConfigurationError):
        compute_suitability(11, 30, 0, -70, "Oysters", inputs=inputs)


def test_missing_inputs_raise_load_error(tmp_path):
    with pytest.raises(InputLoadError):
        prepare_layers(SuitabilityInputs.from_dir(tmp_path), verbose=False)
