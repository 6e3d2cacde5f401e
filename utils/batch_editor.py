"""Apply slider values and a filter look to a batch of uploaded photos."""
from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np
from tqdm import tqdm

from configs.config import OUTPUT_DIR, logger
from photo_booth.capture import StillImageSource
from photo_booth.compositor import Compositor
from photo_booth.errors import PhotoBoothError
from photo_booth import frames
from photo_booth.export import resolve_format, save
from photo_booth.models import AdjustmentParams

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff"}


def _progress(iterable, total: int, desc: str):
    return tqdm(
        iterable, total=total, desc=desc,
        unit="img", leave=False, dynamic_ncols=True,
        mininterval=0.3, file=sys.stdout,
    )


def collect_inputs(items: Iterable[str | Path]) -> List[Path]:
    """Expand folders into their image files; keep explicit files as given."""
    found: List[Path] = []
    for item in items:
        path = Path(item).expanduser()
        if path.is_dir():
            found.extend(sorted(p for p in path.rglob("*") if p.suffix.lower() in IMAGE_EXTENSIONS))
        else:
            found.append(path)
    return found


def edit_images(
    inputs: Sequence[Path],
    out_dir: Path,
    params: AdjustmentParams,
    filter_id: str | None = None,
    fmt: str = "png",
    quality: int | None = None,
    seed: int | None = None,
    frame_id: str | None = None,
    fit: bool = False,
) -> tuple[int, int]:
    """Return ``(processed, errors)``; one bad file never stops the batch."""
    t0 = time.time()
    compositor = Compositor(rng=np.random.default_rng(seed))
    effect = compositor.resolve(filter_id)
    if frame_id:
        frames.get_frame(frame_id)
    profile = resolve_format(fmt)

    processed = 0
    errors = 0
    for src in _progress(inputs, total=len(inputs), desc="Editing photos"):
        dst = out_dir / f"{src.stem}_edited{profile.extension}"
        try:
            frame = StillImageSource(src).get_frame()
            if fit:
                frame = frames.fit_upload(frame)
            edited = compositor.compose(frame, params, effect)
            if frame_id:
                edited = frames.apply_frame(edited, frame_id)
            save(edited, dst, profile.name, quality)
        except PhotoBoothError as exc:
            errors += 1
            logger.error("Failed on %s: %s", src, exc)
            continue
        processed += 1
        logger.debug("Saved edited image: %s", dst)

    logger.info("Done: %d processed, %d errors in %.2fs.", processed, errors, time.time() - t0)
    return processed, errors


def add_adjustment_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--filter", dest="filter_id", default=None, help="Filter id (see `filters`).")
    parser.add_argument("--brightness", type=float, default=100.0, help="Percent, 100 = unchanged.")
    parser.add_argument("--contrast", type=float, default=100.0, help="Percent, 100 = unchanged.")
    parser.add_argument("--saturation", type=float, default=100.0, help="Percent, 100 = unchanged.")
    parser.add_argument("--temperature", type=float, default=0.0, help="-100 (cool) .. 100 (warm).")
    parser.add_argument("--grain", type=float, default=0.0, help="Film grain 0-100.")
    parser.add_argument("--fade", type=float, default=0.0, help="Faded highlights 0-100.")
    parser.add_argument("--vignette", type=float, default=0.0, help="Edge darkening 0-100.")
    parser.add_argument("--seed", type=int, default=0, help="Grain seed (0 = random).")


def params_from_args(args: argparse.Namespace) -> AdjustmentParams:
    return AdjustmentParams(
        brightness=args.brightness,
        contrast=args.contrast,
        saturation=args.saturation,
        temperature=args.temperature,
        grain=args.grain,
        fade=args.fade,
        vignette=args.vignette,
    )


def add_edit_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("inputs", nargs="+", help="Image files or folders.")
    parser.add_argument("--output", default="", help="Output folder (default: OUTPUT_DIR).")
    parser.add_argument("--format", default="png", help="png, jpeg, jpg or webp.")
    parser.add_argument("--quality", type=int, default=None, help="Quality for lossy formats (1-100).")
    parser.add_argument("--frame", dest="frame_id", default=None, help="Decorative frame (see `frames`).")
    parser.add_argument("--fit", action="store_true", help="Scale uploads to fit 800x600 first.")
    add_adjustment_arguments(parser)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply adjustments and a filter look to photos.")
    add_edit_arguments(parser)
    return run(parser.parse_args(argv))


def run(args: argparse.Namespace) -> int:
    inputs = collect_inputs(args.inputs)
    if not inputs:
        print("No images found.")
        return 2
    out_dir = Path(args.output).expanduser() if args.output else OUTPUT_DIR
    seed = None if args.seed == 0 else int(args.seed)

    try:
        processed, errors = edit_images(
            inputs, out_dir, params_from_args(args), args.filter_id, args.format, args.quality, seed,
            args.frame_id, args.fit,
        )
    except PhotoBoothError as exc:
        print(str(exc))
        return 2

    print(f"Edited {processed} of {len(inputs)} photos into {out_dir}.")
    return 1 if errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
