from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "160", "--height", "120", "--max-iterations", "64"]


@dataclass
class Example:
    name: str
    args: list[str]
    expected: Path

    def full_args(self) -> list[str]:
        return [sys.executable, "explore.py", *BASE_ARGS, *self.args, "--output", str(self.expected)]


def _example(name: str, filename: str, *args: str) -> Example:
    return Example(name=name, args=list(args), expected=EXAMPLES_ROOT / name / filename)


EXAMPLES: list[Example] = [
    _example("default", "default.png"),
    _example("max-iterations", "deep.png", "--max-iterations", "512"),
    _example("lock-aspect", "square.png", "--width", "160", "--height", "160", "--lock-aspect"),
    _example("zoom-in", "seahorse.png", "--event", "zoom-in@104,44", "--event", "zoom-in@104,44"),
    _example("zoom-out", "wide.png", "--event", "zoom-out"),
    _example("click", "recenter.png", "--event", "click@40,60"),
    _example("pan", "panned.png", "--event", "pan-left", "--event", "pan-up", "--pan-step", "0.3"),
    _example("reset", "reset.png", "--event", "zoom-in@10,10", "--event", "reset"),
    _example("zoom-factor", "fast.png", "--zoom-factor", "3", "--event", "zoom-in@60,60"),
    _example("anchors", "fire.png", "--anchors", "#000000,#880000,#ff8800,#ffff88"),
    _example("colormap", "inferno.png", "--colormap", "inferno"),
    _example("colormap-anchors", "coarse.png", "--colormap", "viridis", "--colormap-anchors", "3"),
    _example("hud", "annotated.png", "--hud", "--event", "zoom-in@80,60"),
    _example("format", "custom.webp", "--format", "webp"),
    _example(
        "gif",
        "tour.gif",
        "--mode", "gif",
        "--gif-frame-duration", "0.3",
        "--event", "zoom-in@104,44",
        "--event", "pan-right",
        "--event", "zoom-out",
        "--event", "reset",
    ),
    _example("verbose", "diagnostic.png", "--verbose"),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            shutil.rmtree(path)


def _verify(example: Example) -> None:
    if not example.expected.is_file():
        raise RuntimeError(f"Expected file {example.expected} was not created")
    if example.expected.stat().st_size == 0:
        raise RuntimeError(f"File {example.expected} is empty")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.expected.parent])
        example.expected.parent.mkdir(parents=True, exist_ok=True)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
