from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from prd.solver import coefficient_table


def _format_percentage(value: float, *, digits: int = 5) -> str:
    # Keep integers as integers for readability.
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return f"{value:.{digits}f}".rstrip("0").rstrip(".")


def coefficient_table_to_markdown(coefficients: Sequence[float], *, step: int = 1, digits: int = 5) -> str:
    """Render percentage-scale coefficients (index = nominal percentage) as markdown."""

    if step < 1:
        raise ValueError("step must be >= 1")

    lines: list[str] = ["## PRD coefficients", ""]
    lines.append("| Nominal % | C % |")
    lines.append("| --- | --- |")
    for p in range(0, len(coefficients), step):
        lines.append(f"| {p} | {_format_percentage(coefficients[p], digits=digits)} |")

    return "\n".join(lines) + "\n"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a markdown table of PRD coefficients")
    parser.add_argument("--step", type=int, default=1, help="Only include every n-th nominal percentage")
    parser.add_argument("--out", type=Path, default=None, help="Optional output markdown path")

    args = parser.parse_args()

    md = coefficient_table_to_markdown(coefficient_table(), step=args.step)

    if args.out is None:
        print(md)
    else:
        args.out.write_text(md, encoding="utf-8")


if __name__ == "__main__":
    main()
