# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - coarse_table        → 4-bin table (1 KiB, 64 KiB, 1 MiB, 16 MiB)
# - engine              → RecommendationEngine with default settings
# - scenario_a_sizes    → 5 × 500 B + 5 × 2 MiB
# - scenario_b_sizes    → 10,000 × 4 KiB + 10 × 100 MiB (generator)
# - size_tree           → Small directory tree under tmp_path
# - clean_config        → Config singleton reset, env vars cleared
#
# ==============================================

import pytest

from recordsize_advisor.analysis import BinTable, KiB, MiB
from recordsize_advisor.config import reset_config
from recordsize_advisor.recommendation import RecommendationEngine

CONFIG_ENV_VARS = (
    "PERCENTILE_WRITE",
    "PERCENTILE_MIXED",
    "PERCENTILE_READ",
    "SKEW_POLICY",
    "SKEW_MIN_SMALL_COUNT_FRACTION",
    "SKEW_MIN_LARGE_BYTE_FRACTION",
    "SKEW_MIN_SMALL_FILES",
    "RECORDSIZE_COLOR",
    "RECORDSIZE_PROGRESS",
    "HISTOGRAM_WIDTH",
    "PROGRESS_UPDATE_EVERY",
)


@pytest.fixture
def coarse_table():
    """A small bin table for tests that want readable indices."""
    return BinTable((1 * KiB, 64 * KiB, 1 * MiB, 16 * MiB))


@pytest.fixture
def engine():
    return RecommendationEngine()


@pytest.fixture
def scenario_a_sizes():
    return [500] * 5 + [2 * MiB] * 5


@pytest.fixture
def scenario_b_sizes():
    def sizes():
        for _ in range(10_000):
            yield 4096
        for _ in range(10):
            yield 100 * MiB
    return sizes


@pytest.fixture
def size_tree(tmp_path):
    """
    Directory tree with known file sizes:

        root/a.bin        100 B
        root/b.bin        0 B
        root/sub/c.bin    4096 B
        root/sub/deep/d   70000 B
    """
    root = tmp_path / "root"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "a.bin").write_bytes(b"x" * 100)
    (root / "b.bin").write_bytes(b"")
    (root / "sub" / "c.bin").write_bytes(b"y" * 4096)
    (root / "sub" / "deep" / "d").write_bytes(b"z" * 70000)
    return root


@pytest.fixture
def clean_config(monkeypatch):
    """Reset the config singleton and clear every config variable."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
