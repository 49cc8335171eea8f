"""Messages exchanged over the UWB link and the ranging records built from them."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _as_point(value, name: str) -> np.ndarray:
    point = np.array(value, dtype=float)
    if point.shape != (3,):
        raise ValueError(f"{name} must hold exactly three coordinates, got shape {point.shape}")
    return point


def _check_id(value: int, name: str) -> int:
    value = int(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass(eq=False)
class UWBMessage:
    """A TDMA beacon: who sent it, when (in picoseconds) and the GPS fix it claims."""

    sender_id: int
    tx_timestamp_ps: int
    gps_position: np.ndarray

    def __post_init__(self) -> None:
        self.sender_id = _check_id(self.sender_id, "sender_id")
        self.tx_timestamp_ps = int(self.tx_timestamp_ps)
        if self.tx_timestamp_ps < 0:
            raise ValueError(f"tx_timestamp_ps must be non-negative, got {self.tx_timestamp_ps}")
        self.gps_position = _as_point(self.gps_position, "gps_position")


@dataclass(eq=False)
class RangingMeasurement:
    """A time of arrival of one sender's beacon, as seen by one receiving anchor."""

    target_id: int
    anchor_id: int
    anchor_pos: np.ndarray
    toa_seconds: float
    is_los: bool

    def __post_init__(self) -> None:
        self.target_id = _check_id(self.target_id, "target_id")
        self.anchor_id = _check_id(self.anchor_id, "anchor_id")
        self.anchor_pos = _as_point(self.anchor_pos, "anchor_pos")
        self.toa_seconds = float(self.toa_seconds)
        self.is_los = bool(self.is_los)