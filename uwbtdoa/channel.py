"""Statistical UWB radio channel: line of sight, path loss, delay spread, ranging error."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

FREQUENCY_GHZ = 6.5
_LOS_SAMPLES = 20
_LOS_SCALE_M = {"outdoor": 500.0, "indoor": 30.0}
_DEFAULT_LOS_SCALE_M = 150.0


@dataclass
class ChannelCondition:
    """Link state between a transmitter and a receiver."""

    is_los: bool
    path_loss_db: float
    delay_spread_ns: float
    rssi_dbm: float
    ranging_error_m: float


class UWBChannel:
    """Random channel model; ``rng`` supplies ``normal`` and ``uniform`` draws."""

    def __init__(self, environment: str = "outdoor", rng=None) -> None:
        self.environment = environment
        self.obstacles: list[tuple[np.ndarray, float]] = []
        self._rng = rng if rng is not None else np.random.default_rng()

    def add_obstacle(self, center, radius: float) -> None:
        """Add a spherical obstacle that blocks any path passing through it."""
        self.obstacles.append((np.asarray(center, dtype=float), float(radius)))

    def determine_los(self, tx, rx) -> bool:
        """Decide whether the link is line of sight.

        The path is sampled for obstacles; if none is hit, line of sight is drawn
        with a probability that decays with distance.
        """
        tx = np.asarray(tx, dtype=float)
        rx = np.asarray(rx, dtype=float)
        fractions = np.arange(_LOS_SAMPLES) / _LOS_SAMPLES
        points = tx + np.outer(fractions, rx - tx)
        for center, radius in self.obstacles:
            if np.any(np.linalg.norm(points - center, axis=1) < radius):
                return False

        distance = float(np.linalg.norm(rx - tx))
        scale = _LOS_SCALE_M.get(self.environment, _DEFAULT_LOS_SCALE_M)
        p_los = math.exp(-distance / scale)
        return float(self._rng.uniform(0.0, 1.0)) < p_los

    def path_loss(self, distance_m: float, is_los: bool) -> float:
        """Free-space loss plus shadowing, and excess loss when not line of sight.

        Raises ValueError for a non-positive distance.
        """
        fspl_db = 20 * math.log10(distance_m) + 20 * math.log10(FREQUENCY_GHZ) + 92.45
        if is_los:
            return fspl_db + float(self._rng.normal(0.0, 3.0))
        if self.environment == "outdoor":
            excess_db = 5.0 + 10 * math.log10(distance_m / 10.0)
        else:
            excess_db = 10.0 + 15 * math.log10(distance_m / 10.0)
        return fspl_db + excess_db + float(self._rng.normal(0.0, 6.0))

    def delay_spread(self, distance_m: float, is_los: bool) -> float:
        """RMS delay spread in nanoseconds."""
        if is_los:
            return 5.0 + distance_m * 0.02
        if self.environment == "outdoor":
            return 15.0 + distance_m * 0.1
        return 25.0 + distance_m * 0.3

    def ranging_error(self, is_los: bool, distance_m: float) -> float:
        """Ranging error in metres; NLOS links carry a positive bias."""
        if is_los:
            base_error = float(self._rng.normal(0.0, 0.10))
        else:
            bias = float(self._rng.uniform(0.3, 2.5))
            base_error = bias + float(self._rng.normal(0.0, 0.50))
        return base_error * (1.0 + distance_m / 200.0)

    def compute_channel_condition(self, tx_pos, rx_pos, tx_power_dbm: float = 0.0) -> ChannelCondition:
        """Draw the full link state between ``tx_pos`` and ``rx_pos``."""
        tx_pos = np.asarray(tx_pos, dtype=float)
        rx_pos = np.asarray(rx_pos, dtype=float)
        distance_m = float(np.linalg.norm(rx_pos - tx_pos))

        is_los = self.determine_los(tx_pos, rx_pos)
        path_loss_db = self.path_loss(distance_m, is_los)
        return ChannelCondition(
            is_los=is_los,
            path_loss_db=path_loss_db,
            delay_spread_ns=self.delay_spread(distance_m, is_los),
            rssi_dbm=tx_power_dbm - path_loss_db,
            ranging_error_m=self.ranging_error(is_los, distance_m),
        )