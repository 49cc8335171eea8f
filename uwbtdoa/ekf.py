"""Extended Kalman filter tracking a transmitter from pseudoranges to fixed anchors.

The state holds position (3), velocity (3) and a range bias in metres that
absorbs the unknown transmitter clock offset.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

SPEED_OF_LIGHT = 299_792_458.0
STATE_SIZE = 7
MEASUREMENT_VARIANCE = 2.0
_DISTANCE_EPSILON = 1e-9


@dataclass(eq=False)
class Measurement:
    """Arrival time at one anchor of a beacon stamped with ``tx_timestamp``."""

    anchor_pos: np.ndarray
    toa: float
    tx_timestamp: float

    def __post_init__(self) -> None:
        self.anchor_pos = np.array(self.anchor_pos, dtype=float)
        if self.anchor_pos.shape != (3,):
            raise ValueError("anchor_pos must hold exactly three coordinates")
        self.toa = float(self.toa)
        self.tx_timestamp = float(self.tx_timestamp)


class TDoAEKF:
    """Constant-velocity EKF with a pseudorange bias term."""

    def __init__(self) -> None:
        self._state = np.zeros(STATE_SIZE)
        self._P = np.eye(STATE_SIZE)
        self._Q = np.eye(STATE_SIZE)

    def reset(self, init_pos) -> None:
        """Restart the filter at ``init_pos`` with zero velocity and bias."""
        self._state = np.zeros(STATE_SIZE)
        self._state[:3] = np.asarray(init_pos, dtype=float)
        self._P = np.eye(STATE_SIZE)
        self._P[:3, :3] *= 5.0
        self._P[6, 6] = 500.0
        self._Q = np.eye(STATE_SIZE)

    def predict(self, dt: float) -> None:
        """Propagate the state ``dt`` seconds forward; non-positive steps are ignored."""
        if dt <= 0:
            return
        F = np.eye(STATE_SIZE)
        F[0, 3] = F[1, 4] = F[2, 5] = dt
        self._state = F @ self._state
        self._P = F @ self._P @ F.T + self._Q

    def update(self, measurements: Iterable[Measurement]) -> None:
        """Correct the state with a batch of pseudorange measurements."""
        batch = list(measurements)
        if not batch:
            return

        anchors = np.array([m.anchor_pos for m in batch], dtype=float)
        z = np.array([(m.toa - m.tx_timestamp) * SPEED_OF_LIGHT for m in batch])

        offsets = self._state[:3] - anchors
        distances = np.linalg.norm(offsets, axis=1)
        h = distances + self._state[6]

        H = np.zeros((len(batch), STATE_SIZE))
        H[:, :3] = offsets / (distances + _DISTANCE_EPSILON)[:, None]
        H[:, 6] = 1.0

        R = np.eye(len(batch)) * MEASUREMENT_VARIANCE
        S = H @ self._P @ H.T + R
        PHt = self._P @ H.T
        K = np.linalg.solve(S.T, PHt.T).T

        self._state = self._state + K @ (z - h)
        self._P = (np.eye(STATE_SIZE) - K @ H) @ self._P

    @property
    def position(self) -> np.ndarray:
        """Estimated position, a copy."""
        return self._state[:3].copy()

    @property
    def state(self) -> np.ndarray:
        """Full state vector (position, velocity, bias), a copy."""
        return self._state.copy()