#!/usr/bin/env python3
"""Command-line driver: pick a check, run its trials, print the outcome.

Exit status is 0 when every trial passes, 1 when a counterexample is found and
2 for an invalid selection or run parameters.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from plumbum import cli  # type: ignore[import-untyped]

from .config import load_check_config
from .engine import Failure, TrialEngine, format_outcome
from .errors import ConfigurationError
from .graph import to_dot
from .registry import CheckKind, resolve

EXIT_OK = 0
EXIT_FALSIFIED = 1
EXIT_CONFIG_ERROR = 2


class QuickDiffCLI(cli.Application):
    """Differential checks of candidate algorithms against trusted ones."""

    PROGNAME = "quickdiff"
    VERSION = "0.1.0"

    check = cli.SwitchAttr(
        ["-c", "--check"], str, mandatory=True, help="Check kind: sort or graph"
    )
    algo = cli.SwitchAttr(
        ["-a", "--algo"],
        str,
        mandatory=True,
        help="Algorithm to check: mergesort/quicksort (sort) or bfs (graph)",
    )
    nb_tests = cli.SwitchAttr(
        ["-n", "--nb-tests"], int, default=None, help="Number of trials (default 500)"
    )
    max_size = cli.SwitchAttr(
        ["--max-size"], int, default=None, help="Largest target input size (default 64)"
    )
    seed = cli.SwitchAttr(
        ["--seed"], int, default=None, help="Session seed (default: random, reported)"
    )
    no_shrink = cli.Flag(["--no-shrink"], help="Report counterexamples unshrunk")
    dot_out = cli.SwitchAttr(
        ["--dot-out"], str, default=None, help="Write a graph counterexample as DOT here"
    )
    verbose = cli.Flag(["-v", "--verbose"], help="Log every trial")

    def main(self) -> int:
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        try:
            config = load_check_config().with_overrides(
                trial_count=self.nb_tests,
                max_size=self.max_size,
                seed=self.seed,
                shrink=False if self.no_shrink else None,
            )
            engine = TrialEngine(config)
            prop = resolve(self.check, self.algo)
        except ConfigurationError as exc:
            print(f"Configuration error: {exc}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        outcome = engine.run(prop, label=f"checking {prop.name}")
        print(format_outcome(outcome, prop.render))
        if isinstance(outcome, Failure):
            self._write_dot(outcome)
            return EXIT_FALSIFIED
        return EXIT_OK

    def _write_dot(self, failure: Failure) -> Optional[Path]:
        if not self.dot_out or CheckKind.parse(self.check) is not CheckKind.GRAPH:
            return None
        graph = failure.shrunk if failure.shrunk is not None else failure.counterexample
        path = Path(self.dot_out)
        path.write_text(to_dot(graph, name="counterexample"))
        print(f"Counterexample written to '{path}'.")
        return path


def main() -> None:
    QuickDiffCLI.run()


if __name__ == "__main__":
    main()
