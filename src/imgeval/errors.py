"""Error hierarchy for metric computation."""

from __future__ import annotations


class ImgevalError(Exception):
    """Base class for all scoring failures surfaced to callers."""


class ModelNotLoadedError(ImgevalError):
    """Naturalness scoring was attempted without a reference model."""

    def __init__(self, message: str = "naturalness model not loaded") -> None:
        super().__init__(message)


class NoValidPatchesError(ImgevalError):
    """Every patch was excluded for near-zero variance (or none fit the image)."""

    def __init__(self, total_patches: int = 0) -> None:
        self.total_patches = total_patches
        super().__init__(
            f"no valid patches for naturalness scoring ({total_patches} extracted, 0 retained)"
        )


class DegenerateGridError(ImgevalError):
    """The image is too small to form a 1x1 downsampled comparison grid."""

    def __init__(self, blkm: int, blkn: int) -> None:
        self.blkm = blkm
        self.blkn = blkn
        super().__init__(f"invalid block dimensions: {blkn}x{blkm}")
