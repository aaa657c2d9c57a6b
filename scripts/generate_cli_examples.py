from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
DEFAULT_VIEW = ["800", "600", "4", "3", "0", "0", "0.285", "0.01"]

# Exit status of argparse's parser.error().
USAGE_ERROR = 2


@dataclass
class Example:
    name: str
    args: list[str]
    output: Path | None = None
    expected_returncode: int = 0

    def full_args(self) -> list[str]:
        args = [sys.executable, "render_julia.py", *self.args]
        if self.output is not None:
            args += ["--output", str(self.output)]
        return args


EXAMPLES: list[Example] = [
    Example(
        name="full-view",
        args=[*DEFAULT_VIEW, "1"],
        output=EXAMPLES_ROOT / "full-view" / "julia.png",
    ),
    Example(
        name="half-plane",
        args=["800", "600", "2", "1.5", "0", "0", "0.285", "0.01", "1"],
        output=EXAMPLES_ROOT / "half-plane" / "julia.png",
    ),
    Example(
        name="off-center",
        args=["800", "600", "1", "0.75", ".45", ".22", "0.285", "0.01", "1"],
        output=EXAMPLES_ROOT / "off-center" / "julia.png",
    ),
    Example(
        name="dendrite",
        args=["800", "600", "4", "3", "0", "0", "-0.8", "0.156", "1"],
        output=EXAMPLES_ROOT / "dendrite" / "julia.png",
    ),
    Example(
        name="workers",
        args=[*DEFAULT_VIEW, "8"],
        output=EXAMPLES_ROOT / "workers" / "julia.png",
    ),
    Example(
        name="max-iterations",
        args=[*DEFAULT_VIEW, "4", "--max-iterations", "250"],
        output=EXAMPLES_ROOT / "max-iterations" / "julia.png",
    ),
    Example(
        name="format",
        args=[*DEFAULT_VIEW, "4", "--format", "webp"],
        output=EXAMPLES_ROOT / "format" / "julia.webp",
    ),
    Example(
        name="verbose",
        args=[*DEFAULT_VIEW, "4", "--verbose"],
        output=EXAMPLES_ROOT / "verbose" / "julia.png",
    ),
    Example(
        name="missing-arguments",
        args=["800", "600"],
        expected_returncode=USAGE_ERROR,
    ),
    Example(
        name="zero-workers",
        args=[*DEFAULT_VIEW, "0"],
        expected_returncode=USAGE_ERROR,
    ),
    Example(
        name="zero-width",
        args=["0", "600", "4", "3", "0", "0", "0", "0", "1"],
        expected_returncode=USAGE_ERROR,
    ),
    Example(
        name="not-a-number",
        args=["800", "600", "four", "3", "0", "0", "0", "0", "1"],
        expected_returncode=USAGE_ERROR,
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    if example.output is None:
        return
    _ensure_clean([example.output.parent])
    example.output.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example, returncode: int) -> None:
    if returncode != example.expected_returncode:
        raise RuntimeError(
            f"Example {example.name} exited with {returncode}, expected {example.expected_returncode}"
        )
    if example.output is not None and not example.output.is_file():
        raise RuntimeError(f"Expected file {example.output} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args())
        _verify(example, completed.returncode)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
