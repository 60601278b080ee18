from __future__ import annotations

from pathlib import Path

from PIL import Image

from tracechart import load_records, mount_views


HERE = Path(__file__).resolve().parent


def main() -> None:
    views = mount_views(load_records(HERE / "charts.json"))
    out_dir = HERE / "out"
    out_dir.mkdir(exist_ok=True)
    try:
        for i, view in enumerate(views):
            markers = view.host.drawn("dot")
            if markers:
                # Hover the last point so the tooltip layer shows up in the snapshot.
                marker = markers[-1]
                view.host.on_pointer_move(marker.cx + view.config.margin_left, marker.cy + view.config.margin_top)
            Image.fromarray(view.frame()).save(out_dir / f"chart_{i}.png")
            print(f"{view.title}: {len(markers)} points -> chart_{i}.png")
    finally:
        for view in views:
            view.close()


if __name__ == "__main__":
    main()
