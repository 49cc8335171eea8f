"""A swarm member: flies a trajectory, reports noisy GPS and tracks its neighbours."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .ekf import Measurement, TDoAEKF
from .messages import RangingMeasurement, UWBMessage
from .trajectories import Trajectory

GPS_SIGMA_HORIZONTAL_M = 0.05
GPS_SIGMA_VERTICAL_M = 0.10
SPOOF_OFFSET_Y_M = 15.0
ALARM_THRESHOLD_M = 10.0
MIN_ANCHORS = 4


class Drone:
    """A drone with its own clock, GPS receiver and bank of per-neighbour filters."""

    def __init__(self, drone_id: int = 0, rng: np.random.Generator | None = None) -> None:
        if drone_id < 0:
            raise ValueError(f"drone_id must be non-negative, got {drone_id}")
        self.id = int(drone_id)
        self.is_malicious = False
        self.true_position = np.zeros(3)
        self.trajectory: Trajectory | None = None
        self.clock_drift_ns = 0.0
        self.clock_offset = 0.0
        self._rng = rng if rng is not None else np.random.default_rng()
        self._filters: dict[int, TDoAEKF] = {}
        self._last_calc_time: dict[int, float] = {}
        self._alarms: dict[int, bool] = {}

    def update_position(self, time: float) -> None:
        """Move to where the trajectory places the drone at ``time``, if it has one."""
        if self.trajectory is not None:
            self.true_position = np.asarray(self.trajectory(time), dtype=float)

    def gps_position(self) -> np.ndarray:
        """A noisy GPS fix; a malicious drone shifts it along y."""
        noise = self._rng.normal(
            0.0, [GPS_SIGMA_HORIZONTAL_M, GPS_SIGMA_HORIZONTAL_M, GPS_SIGMA_VERTICAL_M]
        )
        fix = self.true_position + noise
        if self.is_malicious:
            fix[1] += SPOOF_OFFSET_Y_M
        return fix

    def create_tdma_message(self, now_seconds: float) -> UWBMessage:
        """Build the beacon sent in this drone's slot, stamped with its drifting clock."""
        drift_ps = int(self.clock_drift_ns * 1000.0)
        return UWBMessage(
            sender_id=self.id,
            tx_timestamp_ps=round(now_seconds * 1e12) + drift_ps,
            gps_position=self.gps_position(),
        )

    def compute_neighbor_position(
        self,
        sender_id: int,
        claimed_gps,
        measurements: Iterable[RangingMeasurement],
        current_time: float,
        tx_timestamp_sec: float,
    ) -> None:
        """Track ``sender_id`` from shared arrival times and check its GPS claim."""
        if sender_id == self.id:
            return
        claimed_gps = np.asarray(claimed_gps, dtype=float)

        if sender_id not in self._filters:
            ekf = TDoAEKF()
            ekf.reset(claimed_gps)
            self._filters[sender_id] = ekf
            self._last_calc_time[sender_id] = 0.0
            self._alarms[sender_id] = False

        batch = [
            Measurement(anchor_pos=m.anchor_pos, toa=m.toa_seconds, tx_timestamp=tx_timestamp_sec)
            for m in measurements
        ]
        if len(batch) < MIN_ANCHORS:
            return

        ekf = self._filters[sender_id]
        dt = current_time - self._last_calc_time[sender_id]
        if dt > 0:
            ekf.predict(dt)
            ekf.update(batch)
            self._last_calc_time[sender_id] = current_time

        error = float(np.linalg.norm(ekf.position - claimed_gps))
        self._alarms[sender_id] = error > ALARM_THRESHOLD_M

    def estimated_position_of(self, target_id: int) -> np.ndarray:
        """Filtered position of ``target_id``, or the origin if it is not tracked."""
        ekf = self._filters.get(target_id)
        return ekf.position if ekf is not None else np.zeros(3)

    def is_alarm_active_for(self, target_id: int) -> bool:
        """Whether the GPS claim of ``target_id`` disagrees with the tracked position."""
        return self._alarms.get(target_id, False)