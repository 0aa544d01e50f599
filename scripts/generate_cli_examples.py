from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "240", "--height", "240", "--xres", "0.0125", "--yres", "0.0125"]


@dataclass
class Example:
    name: str
    args: list[str]
    output: Path

    def full_args(self) -> list[str]:
        return [sys.executable, "spectrum.py", *self.args, "--output", str(self.output)]


def _example(name: str, filename: str, *args: str) -> Example:
    return Example(name=name, args=[*BASE_ARGS, *args], output=EXAMPLES_ROOT / name / filename)


EXAMPLES: list[Example] = [
    _example("identity", "identity.png"),
    _example("coefficients", "one-z-two-z2.png", "--coefficients", "1,1,2"),
    _example("roots", "three-roots.png", "--roots", "1,-0.5+0.866j,-0.5-0.866j"),
    _example("unity", "fifth-roots.png", "--unity", "5"),
    _example("lightness-exp", "exp.png", "--unity", "3", "--lightness", "exp"),
    _example("lightness-modsq", "modsq.png", "--unity", "3", "--lightness", "modsq"),
    _example("lightness-flat", "flat.png", "--unity", "3", "--lightness", "flat"),
    _example("repeat-modulus", "modulus-rings.png", "--roots", "1,-1", "--repeat", "modulus"),
    _example("repeat-log-modulus", "log-rings.png", "--unity", "4", "--repeat", "log-modulus"),
    _example("repeat-phase", "phase-rays.png", "--unity", "2", "--repeat", "phase"),
    _example("clamp-threshold", "clamped.png", "--unity", "6", "--lightness", "modsq", "--clamp-threshold", "256"),
    _example("workers", "parallel.png", "--unity", "5", "--workers", "4"),
    _example("format", "custom.bmp", "--unity", "5", "--format", "bmp"),
    _example("verbose", "diagnostic.png", "--coefficients", "0,0,1", "--verbose"),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            shutil.rmtree(path)


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.output.parent])
        subprocess.run(example.full_args(), check=True)
        if not example.output.is_file():
            raise RuntimeError(f"Expected file {example.output} was not created")
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
