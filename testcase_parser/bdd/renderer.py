from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .models import BDDFeature


def to_gherkin(feature: BDDFeature) -> str:
    lines: List[str] = [f"Feature: {feature.title}"]
    for line in feature.description.split("\n"):
        if line.strip():
            lines.append("  " + line)
    for scenario in feature.scenarios:
        lines.append(f"  Scenario: {scenario.title}")
        for step in scenario.steps:
            lines.append(f"    {step.type.keyword} {step.content}")
    return "\n".join(lines) + "\n"


def feature_file_name(feature: BDDFeature, index: int) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", feature.title.lower()).strip("_")
    return f"{index:03d}_{slug or 'untitled'}.feature"


def write_features(
    features: Sequence[BDDFeature],
    out_dir: Path,
    progress_callback: Optional[Callable[[int, int, Path], None]] = None,
) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    total = len(features)
    for idx, feat in enumerate(features, start=1):
        file_path = out_dir / feature_file_name(feat, idx)
        file_path.write_text(to_gherkin(feat), encoding="utf-8")
        written.append(file_path)
        if progress_callback:
            progress_callback(idx, total, file_path)
    return written
