"""
Copyright 2026 prisms-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Render Result Layer
===============================================================================
Writes finished frames to disk. Each frame is saved as SVG, plus a PNG when
cairosvg is installed, under a numbered file name. The caller gets back a
JSON-serializable descriptor.

render_scene() is the one-call path from a Scene to files on disk:
update, draw, save.
===============================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Any, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.scene import Scene


# Frame number shared by every save in the process
_render_counter: int = 0


def reset_render_counter() -> None:
    """Restart frame numbering at 001."""
    global _render_counter
    _render_counter = 0


def _next_frame_name(prefix: str) -> str:
    global _render_counter
    _render_counter += 1
    return f"{prefix}_{_render_counter:03d}"


def _svg_to_png(svg_string: str, png_path: Path, width: int, height: int) -> bool:
    """
    Rasterize an SVG frame with cairosvg.

    Returns:
        False when cairosvg (or its cairo library) is unavailable.
    """
    try:
        import cairosvg
        cairosvg.svg2png(
            bytestring=svg_string.encode('utf-8'),
            write_to=str(png_path),
            output_width=width,
            output_height=height,
        )
    except (ImportError, OSError):
        return False
    return True


def save_render(
    svg_string: str,
    render_dir: str,
    prefix: str,
    width: int,
    height: int,
    description: str,
    scene_summary: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Write one frame as ``{prefix}_{NNN}.svg`` (and ``.png``) in render_dir.

    The directory is created if missing. Frame numbers keep counting across
    prefixes until reset_render_counter() is called.

    Args:
        svg_string: Output of SVGRenderer.to_string().
        render_dir: Target directory.
        prefix: File name stem, e.g. 'mono' or 'white'.
        width: Pixel width of the PNG.
        height: Pixel height of the PNG.
        description: What the frame shows, for humans.
        scene_summary: Optional scene facts to carry along.

    Returns:
        Dict with 'svg_path', 'png_path' (None without PNG), 'png_available',
        'width', 'height', 'description' and 'scene_summary'.
    """
    out_dir = Path(render_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    stem = _next_frame_name(prefix)
    svg_file = out_dir / f"{stem}.svg"
    svg_file.write_text(svg_string, encoding='utf-8')

    png_file = out_dir / f"{stem}.png"
    has_png = _svg_to_png(svg_string, png_file, width, height)

    return {
        'svg_path': str(svg_file),
        'png_path': str(png_file) if has_png else None,
        'png_available': has_png,
        'width': width,
        'height': height,
        'description': description,
        'scene_summary': scene_summary,
    }


def summarize_scene(scene: 'Scene') -> Dict[str, Any]:
    """Plain-data facts about a scene and its latest output."""
    output = scene.update()
    return {
        'scene': scene.get_display_name(),
        'color_mode': output.color_mode,
        'environment_medium': scene.environment_medium.name,
        'prism_medium': scene.prism_medium.name,
        'prism_count': len(scene.prisms),
        'segment_count': len(output.light_rays),
        'intersection_count': len(output.intersections),
        'warning': scene.warning,
    }


def render_scene(
    scene: 'Scene',
    render_dir: str,
    viewbox: Tuple[float, float, float, float],
    width: int = 800,
    height: int = 600,
    prefix: Optional[str] = None,
    description: str = '',
    zoom: float = 1.0,
    verbose: int = 0,
) -> Dict[str, Any]:
    """
    Bring a scene up to date, draw it and save the frame.

    Args:
        scene: Scene to render; recomputed only if it changed.
        render_dir: Target directory.
        viewbox: Visible model region (min_x, min_y, width, height), Y-up.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        prefix: File name stem (default: the color mode).
        description: What the frame shows.
        zoom: Stroke width multiplier for monochromatic rays.
        verbose: Simulator verbosity.

    Returns:
        The save_render() descriptor, with summarize_scene() attached.
    """
    from ..core.svg_renderer import SVGRenderer

    output = scene.update(verbose=verbose)
    renderer = SVGRenderer(width=width, height=height, viewbox=viewbox)
    renderer.draw_scene(scene, output, zoom=zoom)

    return save_render(
        renderer.to_string(),
        render_dir,
        prefix or output.color_mode,
        width,
        height,
        description,
        scene_summary=summarize_scene(scene),
    )
