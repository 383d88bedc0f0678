"""RGBA pixel buffers and the two grayscale reductions."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True, eq=False)
class PixelBuffer:
    """Immutable RGBA image, row-major with the origin at the top-left.

    ``data`` always has shape ``(height, width, 4)`` and dtype ``uint8``.
    """

    width: int
    height: int
    data: NDArray[np.uint8]

    def __post_init__(self) -> None:
        expected = (self.height, self.width, 4)
        if self.data.shape != expected:
            raise ValueError(f"pixel data shape {self.data.shape} does not match {expected}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"pixel data must be uint8, got {self.data.dtype}")
        if self.data.flags.writeable:
            data = self.data.copy()
            data.flags.writeable = False
            object.__setattr__(self, "data", data)

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: bytes | bytearray) -> PixelBuffer:
        """Wrap interleaved RGBA bytes (width * height * 4 of them)."""
        if width < 0 or height < 0:
            raise ValueError(f"invalid dimensions {width}x{height}")
        if len(raw) != width * height * 4:
            raise ValueError(
                f"expected {width * height * 4} bytes for {width}x{height} RGBA, got {len(raw)}"
            )
        arr = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, 4)
        return cls(width=width, height=height, data=arr)

    @classmethod
    def from_array(cls, arr: NDArray[np.generic]) -> PixelBuffer:
        """Build from a (H, W), (H, W, 3) or (H, W, 4) array of 0-255 values."""
        arr = np.asarray(arr)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"unsupported array shape {arr.shape}")
        arr = np.clip(arr, 0, 255).astype(np.uint8)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        h, w = arr.shape[:2]
        return cls(width=w, height=h, data=arr)


def luminance_gray(buf: PixelBuffer) -> NDArray[np.float64]:
    """Weighted luminance ``0.299 R + 0.587 G + 0.114 B`` (naturalness pipeline)."""
    rgb = buf.data.astype(np.float64)
    return 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]


def max_channel_gray(buf: PixelBuffer) -> NDArray[np.float64]:
    """Per-pixel ``max(R, G, B)`` (lightness-order pipeline)."""
    return buf.data[:, :, :3].max(axis=2).astype(np.float64)
