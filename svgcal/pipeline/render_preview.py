from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

PREVIEW_MIN_PX = 1600


def preview_zoom(width: float, height: float, min_px: int = PREVIEW_MIN_PX) -> float:
    """Scale factor that brings the shorter page side up to min_px, never below 1."""
    return max(1.0, min_px / float(min(width, height)))


def render_preview(svg_path: Path, out_path: Path, min_px: int = PREVIEW_MIN_PX) -> Path:
    """Rasterize the calendar page to PNG so it can be checked without a browser."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with fitz.open(str(svg_path)) as doc:
        page = doc.load_page(0)
        zoom = preview_zoom(page.rect.width, page.rect.height, min_px)
        page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False).save(str(out_path))
    logger.debug("Preview %s at zoom %.2f", out_path.name, zoom)
    return out_path


def render_pdf(svg_path: Path, out_path: Path) -> Path:
    """Convert a calendar SVG into a single-page PDF for printing."""
    with fitz.open(str(svg_path)) as doc:
        pdf_bytes = doc.convert_to_pdf()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(pdf_bytes)
    return out_path
