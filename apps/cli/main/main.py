from __future__ import annotations

import logging
import sys

from apps.cli.commands.compute_pmo import ComputePmoCli


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = argv if argv is not None else sys.argv[1:]

    if not args:
        print(
            "Usage:\n"
            "  pmo --csv bars.csv [--time-period N] [--smoothing-period N]"
            " [--signal-period N] [--format text|json]"
        )
        return 2

    cmd = args[0]
    rest = args[1:]

    if cmd == "pmo":
        return ComputePmoCli().run(rest)

    print(f"unknown command: {cmd!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
