from __future__ import annotations

import numpy as np

from tracechart.config import ChartConfig
from tracechart.interaction import TooltipState, tooltip_lines
from tracechart.palette import RGBA, parse_hex_color
from tracechart.raster import (
    draw_hline,
    draw_markers,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_rect,
    fill_rounded_rect,
    new_canvas,
    text_size,
)
from tracechart.render import DrawCommands


TICK_SIZE = 6
TICK_PAD = 3
TOOLTIP_PAD_X = 8
TOOLTIP_PAD_Y = 5
TOOLTIP_LINE_GAP = 3


def paint(commands: DrawCommands, config: ChartConfig, tooltip: TooltipState | None = None) -> np.ndarray:
    """Rasterize one update's draw commands onto a fresh RGBA frame."""
    canvas = new_canvas(commands.width, commands.height, color=parse_hex_color(config.background))
    if not commands.blank:
        paint_axes(canvas, commands, config)
        paint_series(canvas, commands, config)
        paint_legend(canvas, commands, config)
    if tooltip is not None and tooltip.visible:
        paint_tooltip(canvas, tooltip, config)
    return canvas


def paint_placeholder(config: ChartConfig) -> np.ndarray:
    """Gray rounded block with a centered label, shown until the first update."""
    canvas = new_canvas(config.width, config.height, color=parse_hex_color(config.background))
    fill_rounded_rect(
        canvas, 0, 0, config.width, config.height, config.placeholder_radius, parse_hex_color(config.placeholder_color)
    )
    if config.placeholder_text:
        w, h = text_size(config.placeholder_text, font_size_px=config.font_size_px)
        draw_text(
            canvas,
            (config.width - w) // 2,
            (config.height - h) // 2,
            config.placeholder_text,
            parse_hex_color(config.text_color),
            font_size_px=config.font_size_px,
        )
    return canvas


def paint_axes(canvas: np.ndarray, commands: DrawCommands, config: ChartConfig) -> None:
    ox, oy = commands.origin
    plot_w, plot_h = commands.plot_size
    color = parse_hex_color(config.axis_color)
    text_color = parse_hex_color(config.text_color)
    font_px = config.font_size_px

    base_y = oy + plot_h
    draw_hline(canvas, ox, ox + plot_w, base_y, color)
    if commands.x_axis is not None:
        for pos, label in zip(commands.x_axis.positions, commands.x_axis.labels, strict=True):
            px = ox + int(round(pos))
            draw_vline(canvas, px, base_y, base_y + TICK_SIZE, color)
            w, _ = text_size(label, font_size_px=font_px)
            draw_text(canvas, px - w // 2, base_y + TICK_SIZE + TICK_PAD, label, text_color, font_size_px=font_px)

    draw_vline(canvas, ox, oy, oy + plot_h, color)
    if commands.y_axis is not None:
        for pos, label in zip(commands.y_axis.positions, commands.y_axis.labels, strict=True):
            py = oy + int(round(pos))
            draw_hline(canvas, ox - TICK_SIZE, ox, py, color)
            w, h = text_size(label, font_size_px=font_px)
            draw_text(canvas, ox - TICK_SIZE - TICK_PAD - w, py - h // 2, label, text_color, font_size_px=font_px)


def paint_series(canvas: np.ndarray, commands: DrawCommands, config: ChartConfig) -> None:
    ox, oy = commands.origin
    for path in commands.paths:
        if path.is_empty:
            continue
        draw_polyline(canvas, path.xs + ox, path.ys + oy, parse_hex_color(path.color), width=config.line_width)
    by_color: dict[str, list[tuple[float, float]]] = {}
    for marker in commands.markers:
        by_color.setdefault(marker.color, []).append((marker.cx + ox, marker.cy + oy))
    for color, centers in by_color.items():
        xy = np.asarray(centers, dtype=np.float64)
        draw_markers(canvas, xy[:, 0], xy[:, 1], parse_hex_color(color), radius=config.marker_radius)


def paint_legend(canvas: np.ndarray, commands: DrawCommands, config: ChartConfig) -> None:
    text_color = parse_hex_color(config.text_color)
    for item in commands.legend:
        fill_rect(canvas, item.x, item.y, item.swatch, item.swatch, parse_hex_color(item.entry.color))
        _, h = text_size(item.entry.label, font_size_px=config.font_size_px)
        draw_text(
            canvas,
            item.text_x,
            item.y + (item.swatch - h) // 2,
            item.entry.label,
            text_color,
            font_size_px=config.font_size_px,
        )


def paint_tooltip(canvas: np.ndarray, tooltip: TooltipState, config: ChartConfig) -> tuple[int, int, int, int]:
    """Draw the tooltip box at its anchor; returns the box rect."""
    lines = tooltip_lines(tooltip)
    font_px = config.font_size_px
    sizes = [text_size(line, font_size_px=font_px) for line in lines]
    text_w = max((w for w, _ in sizes), default=0)
    line_h = max((h for _, h in sizes), default=int(font_px))
    box_w = text_w + 2 * TOOLTIP_PAD_X
    box_h = len(lines) * line_h + max(0, len(lines) - 1) * TOOLTIP_LINE_GAP + 2 * TOOLTIP_PAD_Y
    left = int(round(tooltip.anchor[0]))
    top = int(round(tooltip.anchor[1]))
    background: RGBA = parse_hex_color(config.tooltip_background)
    fill_rect(canvas, left, top, box_w, box_h, background)
    text_color = parse_hex_color(config.tooltip_text_color)
    y = top + TOOLTIP_PAD_Y
    for line in lines:
        draw_text(canvas, left + TOOLTIP_PAD_X, y, line, text_color, font_size_px=font_px)
        y += line_h + TOOLTIP_LINE_GAP
    return (left, top, box_w, box_h)
