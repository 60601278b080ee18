from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import TypeAlias

import numpy as np
import torch


@dataclass(frozen=True)
class FullRewrite:
    tensor_h_w_4: torch.Tensor


WriteOp: TypeAlias = FullRewrite


@dataclass(frozen=True)
class WriteBatch:
    operations: list[WriteOp]


def compile_full_rewrite_batch(frame_rgba: np.ndarray) -> WriteBatch:
    _check_rgba_frame(frame_rgba)
    tensor = torch.from_numpy(np.ascontiguousarray(frame_rgba))
    return WriteBatch([FullRewrite(tensor)])


def _check_rgba_frame(frame_rgba: np.ndarray) -> None:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")


class DrawingSurface:
    """RGBA255 pixel matrix owned by one chart, updated by atomic write batches."""

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        self.height = height
        self.width = width
        self.background = background
        self._write_lock = threading.Lock()
        self._revision = 0
        self._closed = False
        self._matrix = self._blank()

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def closed(self) -> bool:
        return self._closed

    def read_snapshot(self) -> torch.Tensor:
        with self._write_lock:
            return self._matrix.clone()

    def to_numpy(self) -> np.ndarray:
        return self.read_snapshot().numpy()

    def clear(self) -> int:
        with self._write_lock:
            self._ensure_open()
            self._matrix = self._blank()
            self._revision += 1
            return self._revision

    def submit_write_batch(self, batch: WriteBatch) -> int:
        if not batch.operations:
            raise ValueError("write batch must include at least one operation")

        with self._write_lock:
            self._ensure_open()
            staged = self._matrix
            for op in batch.operations:
                staged = self._apply_operation(op)
            self._matrix = staged
            self._revision += 1
            return self._revision

    def close(self) -> None:
        with self._write_lock:
            self._closed = True
            self._matrix = torch.zeros((0, 0, 4), dtype=torch.uint8)

    def _blank(self) -> torch.Tensor:
        bg = torch.tensor(self.background, dtype=torch.uint8).view(1, 1, 4)
        return bg.expand(self.height, self.width, 4).clone()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("drawing surface is closed")

    def _apply_operation(self, op: WriteOp) -> torch.Tensor:
        if isinstance(op, FullRewrite):
            return _checked_rgba_tensor(op.tensor_h_w_4, (self.height, self.width, 4))
        raise TypeError(f"Unsupported write op: {type(op)!r}")


def _checked_rgba_tensor(value: torch.Tensor, expected_shape: tuple[int, ...]) -> torch.Tensor:
    if not torch.is_tensor(value):
        raise ValueError("rgba tensor must be a torch.Tensor")
    if tuple(value.shape) != expected_shape:
        raise ValueError(f"rgba tensor has invalid shape: {tuple(value.shape)} expected {expected_shape}")
    if value.dtype != torch.uint8:
        raise ValueError(f"rgba tensor must be uint8, got {value.dtype}")
    return value.clone()
