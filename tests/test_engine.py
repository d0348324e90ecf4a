import logging

import pytest

from quickdiff import algorithms
from quickdiff.config import CheckConfig
from quickdiff.engine import Failure, Success, TrialEngine, format_outcome
from quickdiff.errors import ConfigurationError
from quickdiff.generators import generate_values
from quickdiff.graph import has_self_loop
from quickdiff.property import DifferentialProperty, bfs_property, sort_property
from quickdiff.shrink import shrink_values


def _dedup_sort(xs):
    return sorted(set(xs))


def _quicksort_dropping_equal_keys(xs):
    if len(xs) <= 1:
        return list(xs)
    pivot = xs[0]
    less = [x for x in xs if x < pivot]
    greater = [x for x in xs if x > pivot]
    return _quicksort_dropping_equal_keys(less) + [pivot] + _quicksort_dropping_equal_keys(greater)


def _bfs_off_by_one_past_first_level(graph, source):
    return [d + 1 if d > 1 else d for d in algorithms.bfs_seq(graph, source)]


def _raising_sort(xs):
    raise RuntimeError("boom")


def test_size_grows_over_trials() -> None:
    engine = TrialEngine(CheckConfig(trial_count=500, max_size=64))
    assert engine.size_for_trial(0) == 1
    assert engine.size_for_trial(250) == 33
    assert engine.size_for_trial(499) == 64


def test_invalid_config_fails_before_any_trial() -> None:
    with pytest.raises(ConfigurationError):
        TrialEngine(CheckConfig(trial_count=0))
    with pytest.raises(ConfigurationError):
        TrialEngine(CheckConfig(max_size=-3))


@pytest.mark.parametrize("candidate", [algorithms.quicksort, algorithms.mergesort])
def test_correct_sort_passes_500_trials(candidate) -> None:
    outcome = TrialEngine(CheckConfig(seed=11)).run(sort_property(candidate), label="checking sort")

    assert isinstance(outcome, Success)
    assert outcome.passed
    assert outcome.trial_count == 500
    assert outcome.label == "checking sort"
    assert outcome.seed == 11


def test_incorrect_quicksort_is_falsified() -> None:
    prop = sort_property(_quicksort_dropping_equal_keys, name="quicksort")
    outcome = TrialEngine(CheckConfig(seed=11, max_shrink_steps=10000)).run(prop)

    assert isinstance(outcome, Failure)
    assert not outcome.passed
    assert outcome.label == "checking quicksort"
    assert not prop.holds_for(outcome.counterexample)


def test_shrunk_counterexample_still_fails() -> None:
    prop = DifferentialProperty(
        name="dedup",
        trusted=sorted,
        candidate=_dedup_sort,
        generate=lambda size, rng, seed: [rng.randint(-50, 50) for _ in range(40)] + [7, 7],
        shrink=shrink_values,
    )
    outcome = TrialEngine(CheckConfig(trial_count=10, seed=7, max_shrink_steps=10000)).run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.shrunk is not None
    assert outcome.shrink_reductions > 0
    assert len(outcome.shrunk) == 2
    assert outcome.shrunk[0] == outcome.shrunk[1]
    assert not prop.holds_for(outcome.shrunk)
    assert outcome.shrunk_detail.startswith("length mismatch")


def test_replay_regenerates_counterexample() -> None:
    prop = sort_property(_dedup_sort)
    engine = TrialEngine(CheckConfig(trial_count=200, seed=3, shrink=False))
    outcome = engine.run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.shrunk is None
    assert engine.replay(prop, outcome.seed, outcome.trial) == outcome.counterexample


def test_candidate_exception_is_a_trial_failure(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="quickdiff.engine"):
        outcome = TrialEngine(CheckConfig(seed=1)).run(sort_property(_raising_sort))

    assert isinstance(outcome, Failure)
    assert outcome.trial == 1
    assert "RuntimeError: boom" in outcome.detail
    assert "falsified at trial 1" in caplog.text


def test_malformed_candidate_output_is_a_trial_failure() -> None:
    outcome = TrialEngine(CheckConfig(seed=1)).run(sort_property(lambda xs: None))

    assert isinstance(outcome, Failure)
    assert "TypeError" in outcome.detail


def test_property_without_shrinker_reports_original() -> None:
    prop = DifferentialProperty(
        name="no-shrink",
        trusted=sorted,
        candidate=_dedup_sort,
        generate=lambda size, rng, seed: generate_values(size, rng),
    )
    outcome = TrialEngine(CheckConfig(trial_count=200, seed=5)).run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.shrunk is None
    assert outcome.shrink_reductions == 0


def test_parallel_bfs_passes() -> None:
    outcome = TrialEngine(CheckConfig(trial_count=100, max_size=256, seed=2)).run(
        bfs_property(algorithms.bfs_par)
    )
    assert isinstance(outcome, Success)


def test_broken_bfs_shrinks_to_small_graph() -> None:
    prop = bfs_property(_bfs_off_by_one_past_first_level)
    outcome = TrialEngine(CheckConfig(trial_count=100, seed=2, max_shrink_steps=10000)).run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.shrunk is not None
    assert len(outcome.shrunk) == 2
    assert not has_self_loop(outcome.shrunk)
    assert not prop.holds_for(outcome.shrunk)


def test_format_outcome() -> None:
    ok = Success(label="checking bfs", trial_count=500, seed=9)
    assert format_outcome(ok) == "checking bfs: OK, passed 500 tests (seed=9)."

    prop = bfs_property(_bfs_off_by_one_past_first_level)
    failure = TrialEngine(CheckConfig(trial_count=100, seed=2)).run(prop)
    text = format_outcome(failure, prop.render)

    assert "Falsifiable after" in text
    assert "Counterexample:\ndigraph {" in text
    assert "Shrunk (" in text


def _wrong_for_first_calls(count):
    calls = []

    def candidate(xs):
        calls.append(xs)
        if len(calls) <= count:
            return list(reversed(sorted(xs))) + [0]
        return sorted(xs)

    return candidate


def test_flaky_candidate_reports_original_when_shrunk_input_passes(caplog) -> None:
    prop = DifferentialProperty(
        name="flaky",
        trusted=sorted,
        candidate=_wrong_for_first_calls(2),
        generate=lambda size, rng, seed: [3, 1, 2],
        shrink=shrink_values,
    )
    with caplog.at_level(logging.WARNING, logger="quickdiff.engine"):
        outcome = TrialEngine(CheckConfig(trial_count=1, seed=0)).run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.counterexample == [3, 1, 2]
    assert outcome.shrunk is None
    assert outcome.shrink_reductions == 0
    assert "passed on re-check" in caplog.text


def _sorted_nonempty(xs):
    if not xs:
        raise ValueError("trusted needs a non-empty array")
    return sorted(xs)


def test_trusted_fault_on_shrink_candidate_keeps_shrinking() -> None:
    prop = DifferentialProperty(
        name="nonempty",
        trusted=_sorted_nonempty,
        candidate=_dedup_sort,
        generate=lambda size, rng, seed: [2, 2, 1],
        shrink=shrink_values,
    )
    outcome = TrialEngine(CheckConfig(trial_count=1, seed=0)).run(prop)

    assert isinstance(outcome, Failure)
    assert outcome.counterexample == [2, 2, 1]
    assert outcome.shrunk is not None
    assert len(outcome.shrunk) == 2
    assert outcome.shrunk[0] == outcome.shrunk[1]
    assert not prop.holds_for(outcome.shrunk)


def test_format_outcome_counts_reductions() -> None:
    failure = Failure(
        label="checking sort",
        trial=3,
        seed=1,
        size=4,
        counterexample=[2, 2, 1],
        detail="length mismatch: trusted=3 candidate=2",
        shrunk=[0, 0],
        shrunk_detail="length mismatch: trusted=2 candidate=1",
        shrink_reductions=2,
    )
    assert "Shrunk (2 reductions): length mismatch" in format_outcome(failure)
