
"""Entry point for the vintage camera pipeline."""

import argparse
import threading
from pathlib import Path
from typing import Sequence

from configs.config import BOOTH_TARGET_COUNT, BOOTH_TIMER_SECONDS, OUTPUT_DIR, logger
from photo_booth.capture import SequenceSource
from photo_booth.errors import PhotoBoothError
from photo_booth.filters import CATALOG
from photo_booth.frames import FRAMES
from photo_booth.pipeline import BoothSettings, CameraPipeline
from photo_booth.session import BoothListeners
from photo_booth.timer import ManualScheduler, ThreadingScheduler
from utils import batch_editor


def _list_filters(_: argparse.Namespace) -> int:
    for effect in CATALOG:
        print(f"{effect.id:<28} {effect.name:<28} {effect.css}")
    return 0


def _list_frames(_: argparse.Namespace) -> int:
    for frame in FRAMES.values():
        left, top, right, bottom = frame.border
        print(f"{frame.id:<12} {frame.name:<12} border {left}/{top}/{right}/{bottom}px")
    return 0


def _run_booth(args: argparse.Namespace) -> int:
    done = threading.Event()
    listeners = BoothListeners(
        on_countdown=lambda n: logger.info("Smile! %s", n if n else "*flash*"),
        on_complete=lambda _: done.set(),
        on_cancelled=lambda _: done.set(),
    )
    scheduler = ManualScheduler() if args.instant else ThreadingScheduler()
    settings = BoothSettings(
        output_dir=Path(args.output).expanduser() if args.output else OUTPUT_DIR,
        seed=None if args.seed == 0 else int(args.seed),
    )
    pipeline = CameraPipeline(
        SequenceSource(args.images), settings, scheduler=scheduler, listeners=listeners
    )

    pipeline.start_photobooth(
        batch_editor.params_from_args(args), args.filter_id, args.count, args.timer
    )
    if isinstance(scheduler, ManualScheduler):
        scheduler.run_until_idle()
    else:
        done.wait()

    if pipeline.booth.state != "complete":
        print(f"Photobooth cancelled: {pipeline.booth.record.error}")
        return 1
    path = pipeline.export_strip(pipeline.photobooth_strip())
    print(f"Strip saved to {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Vintage camera: filters, edits and photobooth strips.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("filters", help="List the filter looks.").set_defaults(func=_list_filters)
    sub.add_parser("frames", help="List the decorative frames.").set_defaults(func=_list_frames)

    edit = sub.add_parser("edit", help="Edit uploaded photos.")
    batch_editor.add_edit_arguments(edit)
    edit.set_defaults(func=batch_editor.run)

    booth = sub.add_parser("booth", help="Run a timed photobooth session over still images.")
    booth.add_argument("images", nargs="+", help="Frames to shoot, cycled in order.")
    booth.add_argument("--count", type=int, default=BOOTH_TARGET_COUNT, help="Shots per strip (1-5).")
    booth.add_argument("--timer", type=int, default=BOOTH_TIMER_SECONDS, help="Countdown seconds.")
    booth.add_argument("--instant", action="store_true", help="Skip real waiting between ticks.")
    booth.add_argument("--output", default="", help="Output folder (default: OUTPUT_DIR).")
    batch_editor.add_adjustment_arguments(booth)
    booth.set_defaults(func=_run_booth)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except PhotoBoothError as exc:
        print(str(exc))
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
