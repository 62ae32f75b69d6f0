from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from pathspec import PathSpec


def _build_ignore_spec(ignore_globs: Iterable[str]) -> PathSpec:
    return PathSpec.from_lines("gitwildmatch", ignore_globs)


def discover_inputs(root: Path, ignore_globs: Iterable[str], suffixes: Iterable[str]) -> List[Path]:
    """Collect test-case text files under ``root``.

    A file path is returned as the only input regardless of its suffix.
    """
    if root.is_file():
        return [root]

    wanted = {s.lower() for s in suffixes}
    ignore_spec = _build_ignore_spec(ignore_globs)
    inputs: List[Path] = []

    for path in root.rglob("*"):
        rel = path.relative_to(root)
        if ignore_spec.match_file(str(rel)):
            continue
        if path.is_dir():
            continue
        if path.suffix.lower() in wanted:
            inputs.append(path)

    return sorted(inputs)
