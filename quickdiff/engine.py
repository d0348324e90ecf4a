"""Trial engine: repeated differential trials with shrinking on the first failure.

Trials run one after another. Trial ``i`` of ``N`` gets target size
``1 + (i * max_size) // N`` and a seed derived from the session seed, so a
failure's ``(seed, trial)`` pair regenerates the same input via :meth:`replay`.
The engine never waits on anything but the candidate call itself; a candidate
that never returns blocks the run.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .config import CheckConfig
from .hashing import derive_seed
from .property import DifferentialProperty
from .shrink import shrink_counterexample

logger = logging.getLogger(__name__)

_SEED_BITS = 32


@dataclass(frozen=True)
class Success:
    label: str
    trial_count: int
    seed: int

    @property
    def passed(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    label: str
    trial: int
    seed: int
    size: int
    counterexample: Any
    detail: str
    shrunk: Optional[Any] = None
    shrunk_detail: str = ""
    shrink_reductions: int = 0

    @property
    def passed(self) -> bool:
        return False


TrialOutcome = Union[Success, Failure]


class TrialEngine:
    def __init__(self, config: Optional[CheckConfig] = None) -> None:
        self.config = (config or CheckConfig()).validate()

    def size_for_trial(self, index: int) -> int:
        return 1 + (index * self.config.max_size) // self.config.trial_count

    def session_seed(self) -> int:
        if self.config.seed is not None:
            return self.config.seed
        return random.randrange(1 << _SEED_BITS)

    def draw(self, prop: DifferentialProperty, session_seed: int, index: int) -> Any:
        trial_seed = derive_seed(session_seed, index)
        rng = random.Random(trial_seed)
        return prop.generate(self.size_for_trial(index), rng, trial_seed)

    def replay(self, prop: DifferentialProperty, seed: int, trial: int) -> Any:
        """Regenerate the input of 1-based ``trial`` in the session ``seed``."""

        return self.draw(prop, seed, trial - 1)

    def run(self, prop: DifferentialProperty, label: Optional[str] = None) -> TrialOutcome:
        label = label or f"checking {prop.name}"
        seed = self.session_seed()
        logger.info(
            "%s: %d trials, seed=%d", label, self.config.trial_count, seed
        )
        for index in range(self.config.trial_count):
            value = self.draw(prop, seed, index)
            verdict = prop.evaluate(value)
            logger.debug("%s: trial %d %s", label, index + 1, "ok" if verdict.holds else "FAILED")
            if not verdict.holds:
                return self._falsified(prop, label, seed, index, value, verdict.detail)
        logger.info("%s: passed %d trials", label, self.config.trial_count)
        return Success(label=label, trial_count=self.config.trial_count, seed=seed)

    def _falsified(
        self,
        prop: DifferentialProperty,
        label: str,
        seed: int,
        index: int,
        value: Any,
        detail: str,
    ) -> Failure:
        logger.warning("%s: falsified at trial %d (seed=%d): %s", label, index + 1, seed, detail)
        failure = Failure(
            label=label,
            trial=index + 1,
            seed=seed,
            size=self.size_for_trial(index),
            counterexample=value,
            detail=detail,
        )
        if not self.config.shrink or prop.shrink is None:
            return failure

        def still_fails(candidate: Any) -> bool:
            try:
                return not prop.holds_for(candidate)
            except Exception:
                # a trusted fault on a harness-made candidate disqualifies only that candidate
                logger.debug(
                    "%s: trusted raised on shrink candidate %r", label, candidate, exc_info=True
                )
                return False

        shrunk, reductions = shrink_counterexample(
            value,
            still_fails,
            prop.shrink,
            self.config.max_shrink_steps,
        )
        if reductions == 0:
            return failure
        recheck = prop.evaluate(shrunk)
        if recheck.holds:
            logger.warning(
                "%s: shrunk counterexample passed on re-check, reporting the original", label
            )
            return failure
        logger.info("%s: shrunk counterexample in %d reductions", label, reductions)
        return Failure(
            label=label,
            trial=failure.trial,
            seed=seed,
            size=failure.size,
            counterexample=value,
            detail=detail,
            shrunk=shrunk,
            shrunk_detail=recheck.detail,
            shrink_reductions=reductions,
        )


def format_outcome(outcome: TrialOutcome, render: Callable[[Any], str] = repr) -> str:
    if isinstance(outcome, Success):
        return f"{outcome.label}: OK, passed {outcome.trial_count} tests (seed={outcome.seed})."
    lines = [
        f"{outcome.label}: Falsifiable after {outcome.trial} tests "
        f"(seed={outcome.seed}, size={outcome.size}): {outcome.detail}",
        "Counterexample:",
        render(outcome.counterexample).rstrip("\n"),
    ]
    if outcome.shrunk is not None:
        lines.extend(
            [
                f"Shrunk ({outcome.shrink_reductions} reductions): {outcome.shrunk_detail}",
                render(outcome.shrunk).rstrip("\n"),
            ]
        )
    return "\n".join(lines)


__all__ = ["Failure", "Success", "TrialEngine", "TrialOutcome", "format_outcome"]
