from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from kepler_solver.analysis.sweep import SweepLog
from kepler_solver.core.constants import VERSION


def export_sweep_to_json(log: SweepLog, out_path: str = "out/sweep.json") -> str:
    """
    Export sweep samples:
      {
        "version": "2019.11",
        "runs": {
          "S4|NEWTON_RAPHSON": [
            {"e":0.1,"M":0.0,"E":0.0,"error":0,"iterations":1,"dx":0.0,"df":0.0,"nfev":2},
            ...
          ],
          ...
        }
      }
    """
    if not log.samples:
        raise ValueError("No sweep samples found in log.")

    data: Dict[str, Any] = {"version": VERSION, "runs": {}}

    for (starter_name, solver_name), samples in log.samples.items():
        data["runs"][f"{starter_name}|{solver_name}"] = [
            {
                "e": s.e,
                "M": s.M_rad,
                "E": s.result,
                "error": int(s.error),
                "iterations": s.iterations,
                "dx": s.step_error,
                "df": s.residual_error,
                "nfev": s.function_evaluations,
            }
            for s in samples
        ]

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path
