# uwbtdoa

Building blocks for simulating ultra-wideband (UWB) time-difference-of-arrival
localization inside a drone swarm, with GPS-spoofing detection.

Each drone carries a noisy GPS receiver, a drifting clock and one extended
Kalman filter per neighbour. From arrival times of a neighbour's beacon measured
by at least four anchors, the filter estimates where that neighbour really is;
when the estimate and the neighbour's claimed GPS position differ by more than
10 m, an alarm is raised for it.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Modules

- `uwbtdoa.messages` – `UWBMessage` (sender id, transmit timestamp in
  picoseconds, claimed GPS position) and `RangingMeasurement` (target, anchor,
  anchor position, time of arrival, line-of-sight flag).
- `uwbtdoa.ekf` – `TDoAEKF`, a 7-state constant-velocity filter (position,
  velocity, range bias) with `reset`, `predict`, `update` and the `position` and
  `state` properties, fed with `Measurement` values.
- `uwbtdoa.trajectories` – trajectory factories (`make_octahedron_formation`,
  `make_circular_patrol`, `make_atomic_shell`, `make_figure_eight_target`),
  `current_center`, and the dispatchers `anchor_trajectory` and
  `target_trajectory` selected by `Scenario` (octahedron by default).
- `uwbtdoa.channel` – `UWBChannel`, a random channel model (obstacles,
  distance-dependent line of sight, path loss, delay spread, ranging error)
  whose `compute_channel_condition` returns a `ChannelCondition`.
- `uwbtdoa.drone` – `Drone`, with `update_position`, `gps_position`,
  `create_tdma_message`, `compute_neighbor_position`, `estimated_position_of`
  and `is_alarm_active_for`.

## Example

```python
import numpy as np
from uwbtdoa.drone import Drone
from uwbtdoa.ekf import SPEED_OF_LIGHT
from uwbtdoa.messages import RangingMeasurement
from uwbtdoa.trajectories import target_trajectory

target = Drone(0, rng=np.random.default_rng(1))
target.trajectory = target_trajectory()
target.update_position(0.0)

anchors = [np.array(p, dtype=float) for p in
           [(0, 0, 0), (200, 0, 0), (0, 200, 0), (0, 0, 200), (200, 200, 100)]]
measurements = [
    RangingMeasurement(0, i + 1, pos,
                       1.0 + np.linalg.norm(target.true_position - pos) / SPEED_OF_LIGHT, True)
    for i, pos in enumerate(anchors)
]

observer = Drone(1)
observer.compute_neighbor_position(0, target.gps_position(), measurements, 1.0, 1.0)
print(observer.estimated_position_of(0), observer.is_alarm_active_for(0))
```

## What the package does not do

The package provides no simulation driver: there is no TDMA slot scheduler,
no event loop, no clock synchronisation against a master anchor, no CSV
observation log and no command to run a whole scenario. Putting drones, the
channel and the filters together over time is left to the caller.