from __future__ import annotations

from pathlib import Path

from . import config
from .models import RenderedMonth


def output_dir(base_dir: Path | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    root.mkdir(parents=True, exist_ok=True)
    return root


def output_path(filename: str, base_dir: Path | None = None) -> Path:
    if "/" in filename or "\\" in filename or ".." in filename:
        raise ValueError(f"Invalid output filename: {filename}")
    return output_dir(base_dir) / filename


def write_document(rendered: RenderedMonth, base_dir: Path | None = None) -> Path:
    path = output_path(rendered.filename, base_dir=base_dir)
    path.write_text(rendered.content, encoding="utf-8")
    return path
