"""Spectrogram computation pipeline.

:class:`SpectrogramBuilder` turns per-channel sample buffers into uint8
intensity matrices:

1. frame each channel with a fixed step (derived from the display width
   when no overlap is configured)
2. window and transform every frame with a shared :class:`FFTPlan`
3. optionally project the spectrum onto mel bands
4. quantize magnitudes to bytes in the configured decibel window

The plan and mel filterbank are built once per sample rate and only read
afterwards, so channels can be processed concurrently.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from fastspec.config import SpectrogramConfig
from fastspec.exceptions import DataError
from fastspec.primitives._frame_impl import frame_signal, num_frames
from fastspec.primitives.fft import FFTPlan, build_plan, compute_spectrum
from fastspec.primitives.mel import MelFilterBank, apply_mel, mel_filterbank
from fastspec.primitives.quantize import quantize_db
from fastspec.types.audio import AudioData, as_channels
from fastspec.types.results import SpectrogramResult

_logger = logging.getLogger(__name__)

# Frames transformed per batch; bounds the temporary float64 buffers
_CHUNK_FRAMES = 1024


def _validate_sample_rate(sample_rate: float) -> float:
    if (
        isinstance(sample_rate, bool)
        or not isinstance(sample_rate, numbers.Real)
        or not math.isfinite(sample_rate)
        or sample_rate <= 0
    ):
        raise DataError(f"sample_rate must be a positive finite number, got {sample_rate!r}")
    return float(sample_rate)


class SpectrogramBuilder:
    """Computes intensity matrices for one configuration.

    Args:
        config: Spectrogram configuration (default: ``SpectrogramConfig()``)

    Example:
        >>> builder = SpectrogramBuilder(SpectrogramConfig(scale="linear"))
        >>> result = builder.compute(samples, 44100, display_width=800)
        >>> result[0].shape
        (800, 256)
    """

    def __init__(self, config: SpectrogramConfig | None = None):
        self.config = config if config is not None else SpectrogramConfig()
        self._plans: dict[float, FFTPlan] = {}
        self._banks: dict[float, MelFilterBank] = {}

    def plan(self, sample_rate: float) -> FFTPlan:
        """Transform plan for ``sample_rate``, built on first use."""
        sample_rate = _validate_sample_rate(sample_rate)
        plan = self._plans.get(sample_rate)
        if plan is None:
            plan = build_plan(
                self.config.frame_size,
                sample_rate,
                self.config.window_func,
                self.config.alpha,
            )
            self._plans[sample_rate] = plan
        return plan

    def mel_bank(self, sample_rate: float) -> MelFilterBank | None:
        """Mel filterbank for ``sample_rate``, or None on the linear scale."""
        if self.config.scale != "mel":
            return None
        sample_rate = _validate_sample_rate(sample_rate)
        bank = self._banks.get(sample_rate)
        if bank is None:
            bank = mel_filterbank(self.config.mel_filters, sample_rate, self.config.frame_size)
            self._banks[sample_rate] = bank
        return bank

    def compute(
        self,
        audio: np.ndarray | Sequence[Sequence[float]] | AudioData,
        sample_rate: float | None = None,
        *,
        display_width: int | None = None,
        max_workers: int | None = None,
    ) -> SpectrogramResult:
        """Compute one intensity matrix per processed channel.

        Args:
            audio: Samples as [samples], [channels, samples], a sequence of
                per-channel sequences, or AudioData
            sample_rate: Sample rate in Hz (taken from AudioData if omitted)
            display_width: Target column count used to derive the overlap
                when the config does not set one
            max_workers: Process channels on this many threads

        Returns:
            SpectrogramResult with uint8 matrices of shape (columns, rows)

        Raises:
            DataError: If the sample rate is invalid or a channel is empty or
                shorter than one frame
            ConfigurationError: If the derived step size is below one sample
        """
        if sample_rate is None:
            if not isinstance(audio, AudioData):
                raise DataError("sample_rate is required unless audio is AudioData")
            sample_rate = audio.sample_rate
        sample_rate = _validate_sample_rate(sample_rate)

        channels = as_channels(audio)
        if not self.config.split_channels:
            channels = channels[:1]

        frame_size = self.config.frame_size
        for i, samples in enumerate(channels):
            if samples.shape[0] == 0:
                raise DataError(f"Channel {i} is empty")
            if samples.shape[0] < frame_size:
                raise DataError(
                    f"Channel {i} has {samples.shape[0]} samples, fewer than one "
                    f"frame of {frame_size}"
                )

        step = self.config.step_size(channels[0].shape[0], display_width)
        plan = self.plan(sample_rate)
        bank = self.mel_bank(sample_rate)

        if max_workers is not None and max_workers > 1 and len(channels) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outputs = list(
                    executor.map(lambda s: self._compute_channel(s, plan, bank, step), channels)
                )
        else:
            outputs = [self._compute_channel(s, plan, bank, step) for s in channels]

        for i, (matrix, _) in enumerate(outputs):
            _logger.debug(
                "Channel %d: %d frames of %d samples, step %d",
                i,
                matrix.shape[0],
                frame_size,
                step,
            )

        return SpectrogramResult(
            matrices=[m for m, _ in outputs],
            sample_rate=sample_rate,
            config=self.config,
            peaks=[p for _, p in outputs],
            step=step,
        )

    def _compute_channel(
        self,
        samples: np.ndarray,
        plan: FFTPlan,
        bank: MelFilterBank | None,
        step: int,
    ) -> tuple[np.ndarray, float]:
        n = plan.frame_size
        total = samples.shape[0]
        count = num_frames(total, n, step)
        dropped = total - ((count - 1) * step + n)
        if dropped:
            _logger.debug("Dropping %d trailing samples after the last whole frame", dropped)

        frames = frame_signal(samples, n, step)
        rows = bank.num_filters if bank is not None else plan.num_bins
        matrix = np.empty((count, rows), dtype=np.uint8)
        peak = 0.0

        for start in range(0, count, _CHUNK_FRAMES):
            stop = min(start + _CHUNK_FRAMES, count)
            spectrum, frame_peaks = compute_spectrum(plan, frames[start:stop], return_peak=True)
            # NaN samples give NaN peaks
            peak = max(peak, float(np.nan_to_num(frame_peaks, nan=0.0).max()))
            if bank is not None:
                spectrum = apply_mel(spectrum, bank)
            matrix[start:stop] = quantize_db(
                spectrum,
                gain_db=self.config.gain_db,
                range_db=self.config.range_db,
                mode=self.config.quantize_mode,
            )
        return matrix, peak


__all__ = ["SpectrogramBuilder"]
