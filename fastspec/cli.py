"""Command-line interface for fastspec."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from fastspec.config import SpectrogramConfig
from fastspec.exceptions import FastSpecError
from fastspec.primitives.quantize import QUANTIZE_MODES
from fastspec.primitives.window import WindowFunction

_logger = logging.getLogger(__name__)

# CLI destination -> SpectrogramConfig field
_OVERRIDES = {
    "frame_size": "frame_size",
    "overlap": "overlap",
    "window": "window_func",
    "alpha": "alpha",
    "scale": "scale",
    "mel_filters": "num_mel_filters",
    "gain_db": "gain_db",
    "range_db": "range_db",
    "color_map": "color_map",
    "quantize_mode": "quantize_mode",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastspec",
        description="Compute spectrogram intensity matrices from an audio file",
    )
    parser.add_argument("input", help="Audio file, or frequencies JSON with --precomputed")
    parser.add_argument("--width", type=int, default=None, help="Output column count")
    parser.add_argument("--frame-size", type=int, default=None, help="FFT frame length")
    parser.add_argument("--overlap", type=int, default=None, help="Samples shared by frames")
    parser.add_argument(
        "--window",
        default=None,
        choices=[w.value for w in WindowFunction],
        help="Window function",
    )
    parser.add_argument("--alpha", type=float, default=None, help="Window shape parameter")
    parser.add_argument("--scale", default=None, choices=["linear", "mel"])
    parser.add_argument("--mel-filters", type=int, default=None, help="Mel band count")
    parser.add_argument("--gain-db", type=float, default=None)
    parser.add_argument("--range-db", type=float, default=None)
    parser.add_argument("--color-map", default=None, help="Colormap for --rgba output")
    parser.add_argument("--quantize-mode", default=None, choices=list(QUANTIZE_MODES))
    parser.add_argument(
        "--split-channels", action="store_true", help="One matrix per channel"
    )
    parser.add_argument(
        "--preset",
        default=None,
        choices=sorted(SpectrogramConfig._config_registry),
        help="Start from a named preset",
    )
    parser.add_argument("--config", default=None, help="Start from a JSON config file")
    parser.add_argument("--output", "-o", default=None, help="Write frequencies JSON here")
    parser.add_argument(
        "--rgba",
        default=None,
        help="Write colormapped RGBA arrays (.npz, one per channel) here",
    )
    parser.add_argument(
        "--precomputed",
        action="store_true",
        help="Treat INPUT as precomputed frequencies JSON instead of audio",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> SpectrogramConfig:
    """Resolve the configuration: preset or JSON file, then CLI overrides."""
    if args.config is not None:
        base = SpectrogramConfig.from_json(args.config)
    elif args.preset is not None:
        base = SpectrogramConfig.from_name(args.preset)
    else:
        base = SpectrogramConfig()

    overrides = {
        field: getattr(args, dest)
        for dest, field in _OVERRIDES.items()
        if getattr(args, dest) is not None
    }
    if args.split_channels:
        overrides["split_channels"] = True
    if not overrides:
        return base
    return SpectrogramConfig.from_dict({**base.to_dict(), **overrides})


def run(args: argparse.Namespace) -> None:
    import numpy as np

    from fastspec.io.frequencies import load_frequencies, save_frequencies
    from fastspec.pipeline import SpectrogramBuilder
    from fastspec.primitives.resample import resample
    from fastspec.utils.audio_io import load_audio_file

    config = config_from_args(args)
    if args.precomputed:
        matrices = load_frequencies(args.input)
        peaks = None
    else:
        audio, sr = load_audio_file(args.input)
        result = SpectrogramBuilder(config).compute(audio, sr, display_width=args.width)
        matrices = result.matrices
        peaks = result.peaks

    if args.width is not None:
        matrices = [resample(m, args.width) for m in matrices]

    if args.output is not None:
        path = save_frequencies(matrices, args.output)
        _logger.info("Wrote %d channel(s) to %s", len(matrices), path)

    if args.rgba is not None:
        cmap = config.build_color_map()
        # arr_0, arr_1, ... one (columns, rows, 4) array per channel
        np.savez(args.rgba, *[cmap.apply(m) for m in matrices])
        _logger.info("Wrote RGBA for %d channel(s) to %s", len(matrices), args.rgba)

    if args.output is not None or args.rgba is not None:
        return

    for i, m in enumerate(matrices):
        line = f"channel {i}: {m.shape[0]} columns x {m.shape[1]} rows"
        if peaks is not None:
            line += f", peak {peaks[i]:.6g}"
        print(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the fastspec CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except FastSpecError as e:
        print(f"fastspec: error: {e}", file=sys.stderr)
        return 2
    except ImportError as e:
        print(f"fastspec: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
