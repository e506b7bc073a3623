"""pytest-benchmark hooks for gnaw benchmarks.

Python 3.13+.
"""

from __future__ import annotations

from gnaw.config import CONFIG
from gnaw.diagnostics import strategy


def pytest_benchmark_update_json(config, benchmarks, output_json):  # noqa: ARG001
    """Record the engine build options a benchmark run was taken under.

    Error payloads differ in cost between modes, so results are only
    comparable between runs with the same ``error_mode``.

    Args:
        config: pytest config (required by pytest-benchmark hook signature)
        benchmarks: benchmark results (required by pytest-benchmark hook signature)
        output_json: JSON output dict to modify
    """
    output_json["project"] = "gnaw"
    output_json["error_mode"] = str(strategy.active().mode)
    output_json["regex_bridge"] = CONFIG.regex
    output_json["collections"] = CONFIG.collections
