"""
Tests for the convergence sweep and its exporters.
"""
import json
import math
import pytest

from kepler_solver.analysis.sweep import SweepGridSpec, SweepLog, run_sweep
from kepler_solver.core.constants import VERSION
from kepler_solver.core.errors import ErrorCode
from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.starters import StarterMethod
from kepler_solver.solvers.registry import SolverMethod
from kepler_solver.visualization.export_log import export_sweep_to_json
from kepler_solver.visualization.plotly_convergence import render_convergence_heatmap


@pytest.fixture
def small_grid():
    return SweepGridSpec(e_min=0.1, e_max=0.9, n_eccentricity=3, n_mean_anomaly=8)


@pytest.fixture
def newton_log(small_grid):
    return run_sweep(small_grid, StarterMethod.S4, SolverMethod.NEWTON_RAPHSON)


class TestSweepGridSpec:
    def test_grid_points(self, small_grid):
        es = small_grid.eccentricities()
        ms = small_grid.mean_anomalies()
        assert len(es) == 3
        assert abs(es[1] - 0.5) < 1e-15
        assert len(ms) == 8
        assert ms[0] == 0.0
        assert ms[-1] < 2 * math.pi

    def test_single_eccentricity(self):
        assert SweepGridSpec(e_min=0.4, e_max=0.4, n_eccentricity=1).eccentricities() == [0.4]

    def test_validation(self):
        with pytest.raises(ValueError, match="Eccentricity range"):
            SweepGridSpec(e_min=0.5, e_max=0.2)
        with pytest.raises(ValueError, match="Eccentricity range"):
            SweepGridSpec(e_max=1.0)
        with pytest.raises(ValueError, match="n_eccentricity"):
            SweepGridSpec(n_eccentricity=0)
        with pytest.raises(ValueError, match="n_mean_anomaly"):
            SweepGridSpec(n_mean_anomaly=0)


class TestRunSweep:
    def test_one_sample_per_grid_point(self, newton_log):
        samples = newton_log.samples[("S4", "NEWTON_RAPHSON")]
        assert len(samples) == 24
        assert all(s.error == ErrorCode.NONE for s in samples)

    def test_round_trip_and_iterations(self, newton_log):
        assert newton_log.max_round_trip_error("S4", "NEWTON_RAPHSON") < 1e-12
        assert 1 <= newton_log.max_iterations_used("S4", "NEWTON_RAPHSON") < 20

    def test_tolerances_copied_from_template(self, small_grid):
        template = IterationParameters(tol_f=1e-6, tol_x=1e-6)
        log = run_sweep(small_grid, StarterMethod.S4, SolverMethod.NEWTON_RAPHSON, params=template)
        assert template.iteration_count == 0
        assert log.max_round_trip_error("S4", "NEWTON_RAPHSON") < 1e-5

    def test_runs_accumulate_in_shared_log(self, small_grid):
        log = SweepLog()
        run_sweep(small_grid, StarterMethod.S4, SolverMethod.HALLEY, log=log)
        run_sweep(small_grid, StarterMethod.S1, SolverMethod.MARKLEY, log=log)
        assert set(log.samples) == {("S4", "HALLEY"), ("S1", "MARKLEY")}
        assert log.max_iterations_used("S1", "MARKLEY") == 1

    def test_unknown_tags_are_recorded_with_errors(self, small_grid):
        log = run_sweep(small_grid, StarterMethod.S4, 99)
        samples = log.samples[("S4", "99")]
        assert all(s.error == ErrorCode.BAD_SOLVER_METHOD for s in samples)
        assert log.max_round_trip_error("S4", "99") == 0.0

    def test_missing_run(self, newton_log):
        with pytest.raises(ValueError, match="No samples recorded"):
            newton_log.max_iterations_used("S0", "BISECTION")


class TestExport:
    def test_json_export(self, newton_log, tmp_path):
        out = export_sweep_to_json(newton_log, out_path=str(tmp_path / "sweep.json"))
        with open(out, encoding="utf-8") as f:
            data = json.load(f)

        assert data["version"] == VERSION
        run = data["runs"]["S4|NEWTON_RAPHSON"]
        assert len(run) == 24
        assert set(run[0]) == {"e", "M", "E", "error", "iterations", "dx", "df", "nfev"}
        assert run[0]["error"] == 0

    def test_json_export_empty_log(self, tmp_path):
        with pytest.raises(ValueError, match="No sweep samples"):
            export_sweep_to_json(SweepLog(), out_path=str(tmp_path / "sweep.json"))

    @pytest.mark.parametrize("metric", ["iterations", "residual_error", "step_error"])
    def test_heatmap_html(self, newton_log, tmp_path, metric):
        out = render_convergence_heatmap(
            newton_log, "S4", "NEWTON_RAPHSON", metric=metric,
            out_html=str(tmp_path / "plots" / f"{metric}.html"),
        )
        with open(out, encoding="utf-8") as f:
            html = f.read()
        assert "plotly" in html.lower()

    def test_heatmap_rejects_unknown_metric(self, newton_log, tmp_path):
        with pytest.raises(ValueError, match="metric must be one of"):
            render_convergence_heatmap(newton_log, "S4", "NEWTON_RAPHSON", metric="speed",
                                       out_html=str(tmp_path / "x.html"))

    def test_heatmap_rejects_unknown_run(self, newton_log, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            render_convergence_heatmap(newton_log, "S0", "SECANT", out_html=str(tmp_path / "x.html"))
