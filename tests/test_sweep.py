"""Tests for the parameter sweep."""
import numpy as np
import pytest

from conftest import make_series, write_series


def _write_pair(data_dir, name, u, v):
    write_series(data_dir / f"{name}outU.txt", u)
    write_series(data_dir / f"{name}outV.txt", v)


class TestConditions:
    def test_order_speed_direction_depth(self, small_config):
        order = [idx for idx, _ in small_config.conditions()]
        assert order[:3] == [(0, 0, 0), (0, 0, 1), (0, 0, 2)]
        assert order[3] == (1, 0, 0)

    def test_count(self):
        from velocity_relaxation.config import RelaxationConfig
        cfg = RelaxationConfig()
        assert len(list(cfg.conditions())) == 4 * 6 * 7
        assert cfg.grid_shape == (4, 6, 7)

    def test_direction_index_is_one_based(self, small_config):
        conds = [c for _, c in small_config.conditions()]
        assert [c.direction_index for c in conds[:3]] == [1, 2, 3]
        assert [c.direction for c in conds[:3]] == [0.0, 22.5, 45.0]

    def test_empty_grid_rejected(self):
        from velocity_relaxation.config import RelaxationConfig
        with pytest.raises(ValueError):
            RelaxationConfig(depths=())


class TestRunSweep:
    def test_all_missing(self, tmp_path, small_config, capsys):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        assert result.relaxation.shape == (2, 1, 3)
        assert np.all(result.relaxation == 0)
        assert len(result.warnings) == 6
        assert result.warnings[0] == "Missing files for Speed=110, Dir=101, Depth=115"
        assert "Warning: Missing files" in capsys.readouterr().out

    def test_mixed_cells(self, tmp_path, small_config):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        u = make_series([[3, 3], [1, 1], [1, 1], [1, 1]])
        v = make_series([[0, 0], [0, 0], [0, 0], [0, 0]])
        _write_pair(tmp_path, "102_120_115", u, v)
        # only U present for this one
        write_series(tmp_path / "103_110_115outU.txt", u)

        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        assert result.relaxation[1, 0, 1] == 2
        assert np.count_nonzero(result.relaxation) == 1
        assert result.relaxation.size == 2 * 1 * 3
        assert len(result.warnings) == 5
        assert "Missing files for Speed=110, Dir=103, Depth=115" in result.warnings

    def test_malformed_cell_skipped(self, tmp_path, small_config):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        good = make_series([[1, 1], [1, 1]])
        _write_pair(tmp_path, "101_110_115", np.arange(5.0), good)
        _write_pair(tmp_path, "101_120_115", good, good)

        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        assert result.relaxation[0, 0, 0] == 0
        assert result.relaxation[1, 0, 0] == 1
        assert any(w.startswith("Skipping Speed=110, Dir=101, Depth=115") for w in result.warnings)

    def test_unparseable_cell_skipped(self, tmp_path, small_config):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        (tmp_path / "101_110_115outU.txt").write_text("1.0 abc\n")
        write_series(tmp_path / "101_110_115outV.txt", make_series([[1, 1], [1, 1]]))

        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        assert result.relaxation[0, 0, 0] == 0
        assert result.warnings[0].startswith("Skipping Speed=110, Dir=101, Depth=115")

    def test_step_mismatch_recorded(self, tmp_path, small_config):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        u = make_series([[3, 3], [1, 1], [1, 1], [1, 1]])
        v = make_series([[0, 0], [0, 0], [0, 0]])
        _write_pair(tmp_path, "102_120_115", u, v)

        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        assert result.relaxation[1, 0, 1] == 2
        assert len(result.warnings) == 6
        assert (
            "U has 4 time steps but V has 3 for Speed=120, Dir=102, Depth=115; using 3"
            in result.warnings
        )

    def test_single_step_cell_skipped(self, small_config):
        from velocity_relaxation.series import LoadedSeries
        from velocity_relaxation.sweep import run_sweep
        series = LoadedSeries(make_series([[1, 1]]))
        result = run_sweep(small_config, lambda c, comp: series)
        assert np.all(result.relaxation == 0)
        assert len(result.warnings) == 6
        assert all(w.startswith("Skipping") for w in result.warnings)

    def test_grid_read_only(self, tmp_path, small_config):
        from velocity_relaxation.series import TextSeriesLoader
        from velocity_relaxation.sweep import run_sweep
        result = run_sweep(small_config, TextSeriesLoader(tmp_path, small_config))
        with pytest.raises(ValueError):
            result.relaxation[0, 0, 0] = 5

    def test_in_memory_loader(self, small_config):
        from velocity_relaxation.series import LoadedSeries
        from velocity_relaxation.sweep import run_sweep
        series = LoadedSeries(make_series([[2, 2], [0, 0], [0, 0]]))

        def loader(condition, component):
            return series if condition.speed == 20 else None

        result = run_sweep(small_config, loader)
        np.testing.assert_array_equal(result.relaxation[1, 0, :], [2, 2, 2])
        np.testing.assert_array_equal(result.relaxation[0, 0, :], [0, 0, 0])

    def test_relaxation_seconds(self, small_config):
        from velocity_relaxation.series import LoadedSeries
        from velocity_relaxation.sweep import run_sweep
        series = LoadedSeries(make_series([[2, 2], [0, 0], [0, 0]]))
        result = run_sweep(small_config, lambda c, comp: series if c.direction_index == 1 else None)
        seconds = result.relaxation_seconds()
        assert seconds[0, 0, 0] == pytest.approx(2 * small_config.dt)
        assert np.isnan(seconds[0, 0, 1])
