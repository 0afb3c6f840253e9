from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from apps.api.wiring.modules.indicators import build_compute_pmo_use_case
from apps.cli.wiring.modules.indicators import build_cli_pmo_params
from pmo_indicators.contexts.indicators.adapters.outbound.feeds import load_bars_from_csv
from pmo_indicators.contexts.indicators.application.errors import to_pmo_error
from pmo_indicators.contexts.indicators.domain.entities import PmoPoint
from pmo_indicators.contexts.indicators.domain.errors import (
    BadHistoryError,
    InvalidParameterError,
)
from pmo_indicators.platform.config import load_pmo_runtime_config
from pmo_indicators.platform.errors import PmoError

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 2


class ComputePmoCli:
    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._stdout = stdout
        self._stderr = stderr

    def run(self, argv: Sequence[str]) -> int:
        parser = _build_parser()
        ns = parser.parse_args(list(argv))
        stdout = self._stdout or sys.stdout
        stderr = self._stderr or sys.stderr

        try:
            cfg = load_pmo_runtime_config(environ=self._environ)
            params = build_cli_pmo_params(
                config=cfg,
                time_period=ns.time_period,
                smoothing_period=ns.smoothing_period,
                signal_period=ns.signal_period,
            )
            bars = load_bars_from_csv(Path(ns.csv))
            points = build_compute_pmo_use_case(config=cfg).execute(bars, params)
        except (InvalidParameterError, BadHistoryError, PmoError) as e:
            _print_error(to_pmo_error(e), stream=stderr)
            return EXIT_FAILED
        except (FileNotFoundError, ValueError) as e:
            _print_error(PmoError(code="validation_error", message=str(e)), stream=stderr)
            return EXIT_FAILED

        if ns.format == "json":
            payload = {
                "params": params.as_dict(),
                "points": [p.as_dict() for p in points],
            }
            print(json.dumps(payload, ensure_ascii=False), file=stdout)
        else:
            _print_table(points, stream=stdout)

        log.debug("pmo cli finished: points=%s", len(points))
        return EXIT_OK


def _print_error(error: PmoError, *, stream: TextIO) -> None:
    print(json.dumps(error.to_payload(), ensure_ascii=False), file=stream)


def _print_table(points: Sequence[PmoPoint], *, stream: TextIO) -> None:
    print("index\ttimestamp\troc_ema\tpmo\tsignal", file=stream)
    for p in points:
        row = p.as_dict()
        cells = [
            str(row["index"]),
            row["timestamp"],
            row["roc_ema"] or "",
            row["pmo"] or "",
            row["signal"] or "",
        ]
        print("\t".join(cells), file=stream)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pmo")
    p.add_argument(
        "--csv",
        required=True,
        help="Path to bars CSV with columns timestamp,close[,open,high,low,volume]",
    )
    p.add_argument("--time-period", type=int, default=None, help="ROC EMA period (default: config)")  # noqa: E501
    p.add_argument("--smoothing-period", type=int, default=None, help="PMO period (default: config)")  # noqa: E501
    p.add_argument("--signal-period", type=int, default=None, help="Signal period (default: config)")  # noqa: E501
    p.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format",
    )
    return p
