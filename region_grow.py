#!/usr/bin/env python3
"""
region_grow.py

Full-image colour region growing with a fixed threshold.

Usage:
    region_grow.py <image_path> <threshold>

Every pixel is scanned in row-major order; each unlabelled pixel opens a new
region that absorbs 8-connected neighbours whose RGB distance to the pixel
being expanded is below the threshold. The false-colour preview and the raw
label map are written under output/region_grow/ and the preview is shown.
"""

import argparse, json, logging, sys, time
from pathlib import Path
from typing import List, Optional

import numpy as np

from reggrow import RegionGrowEngine, load_image_rgb, save_label_map, save_preview, show_preview

METHOD_NAME = "region_grow"
OUTPUT_DIR = Path("output")


def build_parser(description: str) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=description)
    ap.add_argument("image_path", type=str, help="image to segment")
    ap.add_argument("threshold", type=float, help="colour distance threshold")
    return ap


def load_engine(image_path: str) -> Optional[RegionGrowEngine]:
    """Decode the image and build an engine, or log why that failed."""
    try:
        return RegionGrowEngine(load_image_rgb(image_path))
    except (OSError, ValueError) as e:
        logging.error(f"Could not load {image_path}: {e}")
        return None


def write_outputs(engine: RegionGrowEngine, image_path: str, method: str, runtime_ms: float) -> np.ndarray:
    """Save preview and label map, log and print the run summary. Returns the preview."""
    base = Path(image_path).stem
    out_root = OUTPUT_DIR / method
    labels = engine.labels
    preview = save_preview(labels, str(out_root / f"{base}_segmented.png"))
    save_label_map(labels, str(out_root / f"{base}_labels.npy"))

    H, W = labels.shape
    unassigned = labels.size - labels.count_assigned()
    logging.info(f"{base}, {H}x{W}, regions {labels.current_region}, pops {engine.iterations}, "
                 f"runtime_ms {runtime_ms:.2f}")
    print(json.dumps({
        "image": base,
        "regions": labels.current_region,
        "iterations": engine.iterations,
        "dissolved": engine.dissolved,
        "unassigned": unassigned,
        "runtime_ms": round(runtime_ms, 2),
        "output_dir": str(out_root),
        "method": method
    }))
    return preview


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser("Colour region growing over the whole image").parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    engine = load_engine(args.image_path)
    if engine is None:
        return 1

    t0 = time.time()
    engine.segment_all(args.threshold, progress=True)
    ms = (time.time() - t0) * 1000.0

    preview = write_outputs(engine, args.image_path, METHOD_NAME, ms)
    show_preview(preview, "Region Growing")
    return 0


if __name__ == "__main__":
    sys.exit(main())
