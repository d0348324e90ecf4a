from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, given, settings

from quickdiff import algorithms
from quickdiff.config import CheckConfig
from quickdiff.engine import Success, TrialEngine
from quickdiff.property import bfs_property, sort_property

from .strategies import edge_lists, value_arrays, windowed_random_graphs


FAST_MAX_EXAMPLES = int(os.getenv("QUICKDIFF_PROP_EXAMPLES", "200"))
NIGHTLY_TRIALS = int(os.getenv("QUICKDIFF_NIGHTLY_TRIALS", "500"))


@pytest.mark.parametrize("candidate", [algorithms.mergesort, algorithms.quicksort])
@given(xs=value_arrays())
@settings(
    max_examples=FAST_MAX_EXAMPLES,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
def test_prop_sort_candidates_match_trusted(candidate, xs) -> None:
    assert sort_property(candidate).holds_for(xs)


@given(edges=edge_lists())
@settings(
    max_examples=FAST_MAX_EXAMPLES,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
def test_prop_bfs_par_matches_bfs_seq(edges) -> None:
    assert bfs_property(algorithms.bfs_par).holds_for(edges)


@given(edges=windowed_random_graphs())
@settings(max_examples=FAST_MAX_EXAMPLES, deadline=None)
def test_prop_bfs_par_on_windowed_random_graphs(edges) -> None:
    assert bfs_property(algorithms.bfs_par, name="bfs").holds_for(edges)


@pytest.mark.nightly
@pytest.mark.parametrize("algo", ["mergesort", "quicksort"])
def test_prop_sort_engine_nightly(algo) -> None:
    if not os.getenv("QUICKDIFF_RUN_NIGHTLY"):
        pytest.skip("Nightly checks disabled (set QUICKDIFF_RUN_NIGHTLY=1 to enable)")
    candidate = getattr(algorithms, algo)
    engine = TrialEngine(CheckConfig(trial_count=NIGHTLY_TRIALS, max_size=1024))
    outcome = engine.run(sort_property(candidate, name=algo))
    assert isinstance(outcome, Success), outcome


@pytest.mark.nightly
def test_prop_bfs_engine_nightly() -> None:
    if not os.getenv("QUICKDIFF_RUN_NIGHTLY"):
        pytest.skip("Nightly checks disabled (set QUICKDIFF_RUN_NIGHTLY=1 to enable)")
    engine = TrialEngine(CheckConfig(trial_count=NIGHTLY_TRIALS, max_size=4096))
    outcome = engine.run(bfs_property(algorithms.bfs_par))
    assert isinstance(outcome, Success), outcome
