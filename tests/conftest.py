"""Pytest configuration for the gnaw test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
These are intensive property tests designed for fuzzing, not unit testing.
Run them via: pytest -m fuzz

Error Modes:
The active error strategy is chosen once per process from GNAW_ERROR_MODE.
The simple_errors / verbose_errors fixtures swap it for one test, so both
payload shapes are covered in a single run.
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from gnaw import config as gnaw_config
from gnaw.config import EngineConfig
from gnaw.diagnostics import strategy
from gnaw.diagnostics.strategy import SimpleErrors, VerboseErrors

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested.

    Behavior:
    - Normal test run (pytest tests/): Fuzz tests are SKIPPED
    - Explicit fuzz run (pytest -m fuzz): Fuzz tests run, others skipped
    - Specific fuzz file (pytest tests/fuzz/...): Runs as specified
    """
    marker_expr = config.getoption("-m", default="")

    if "fuzz" in str(marker_expr):
        return

    args = config.invocation_params.args
    for arg in args:
        if "tests/fuzz" in str(arg):
            return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# ERROR MODE AND CONFIGURATION FIXTURES
# =============================================================================


@pytest.fixture
def simple_errors(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run the test with single-discriminant error payloads."""
    monkeypatch.setattr(strategy, "_active", SimpleErrors())
    yield


@pytest.fixture
def verbose_errors(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run the test with chained (ErrorChain) error payloads."""
    monkeypatch.setattr(strategy, "_active", VerboseErrors())
    yield


@pytest.fixture
def reduced_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Disable owned collections, as GNAW_COLLECT=0 does."""
    monkeypatch.setattr(gnaw_config, "CONFIG", EngineConfig(collections=False))
    yield


@pytest.fixture
def regex_disabled(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Disable the regex bridge, as GNAW_REGEX=0 does."""
    monkeypatch.setattr(gnaw_config, "CONFIG", EngineConfig(regex=False))
    yield
