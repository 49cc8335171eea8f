"""Swarm trajectories: each one maps a time in seconds to a 3-D position."""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import IntEnum

import numpy as np

Trajectory = Callable[[float], np.ndarray]

RADIUS = 80.0
SPEED_FACTOR = 1.0
INITIAL_CENTER = np.array([100.0, 0.0, 50.0])
SWARM_VELOCITY = np.array([2.5, 0.0, 0.0])


class Scenario(IntEnum):
    """Formation flown by the anchor drones."""

    ATOMIC_SHELL = 1
    CIRCULAR_PATROL = 2
    OCTAHEDRON = 3


DEFAULT_SCENARIO = Scenario.OCTAHEDRON


def current_center(t: float) -> np.ndarray:
    """Centre of the swarm at time ``t``; it translates at constant velocity."""
    return INITIAL_CENTER + SWARM_VELOCITY * t


def make_atomic_shell(drone_id: int, total: int) -> Trajectory:
    """Circular orbits in three inclined planes, phased by drone index."""
    if total < 1:
        raise ValueError("total must be at least 1")
    inclination = (0.0, math.pi / 2, math.pi / 4)[drone_id % 3]
    phase_offset = drone_id * 2.0 * math.pi / total
    omega = (2.0 * math.pi / 50.0) * SPEED_FACTOR

    def trajectory(t: float) -> np.ndarray:
        center = current_center(t)
        angle = omega * t + phase_offset
        base_x = RADIUS * math.cos(angle)
        base_y = RADIUS * math.sin(angle)
        base_z = 0.0
        x = base_x
        y = base_y * math.cos(inclination) - base_z * math.sin(inclination)
        z = base_y * math.sin(inclination) + base_z * math.cos(inclination)
        if inclination == 0.0:
            z += 15.0 * math.sin(angle * 2.0)
        return center + np.array([x, y, z])

    return trajectory


def make_circular_patrol(drone_id: int, total: int) -> Trajectory:
    """A horizontal ring shared by ``total - 1`` anchors, alternating altitude."""
    if total < 2:
        raise ValueError("total must be at least 2")
    angle_step = 2.0 * math.pi / (total - 1)
    start_angle = (drone_id - 1) * angle_step
    omega = (2.0 * math.pi / 60.0) * SPEED_FACTOR
    altitude = 15.0 if drone_id % 2 == 0 else -15.0

    def trajectory(t: float) -> np.ndarray:
        center = current_center(t)
        angle = start_angle + omega * t
        return center + np.array([RADIUS * math.cos(angle), RADIUS * math.sin(angle), altitude])

    return trajectory


def make_octahedron_formation(drone_id: int) -> Trajectory:
    """Vertices of a spinning octahedron that travels with the swarm centre."""
    vertex = drone_id % 6
    omega = 0.2 * SPEED_FACTOR

    def trajectory(t: float) -> np.ndarray:
        center = current_center(t)
        theta = omega * t
        local = np.zeros(3)
        if vertex == 0:
            local[2] = RADIUS
        elif vertex == 1:
            local[2] = -RADIUS
        else:
            phase = theta + (vertex - 2) * math.pi / 2
            local[0] = RADIUS * math.cos(phase)
            local[1] = RADIUS * math.sin(phase)
        if drone_id >= 2:
            local[2] += 10.0 * math.sin(t * 0.5 + drone_id)
        return center + local

    return trajectory


def make_figure_eight_target() -> Trajectory:
    """A figure-eight around the moving swarm centre."""
    omega = (2.0 * math.pi / 40.0) * SPEED_FACTOR

    def trajectory(t: float) -> np.ndarray:
        center = current_center(t)
        offset = np.array([
            70.0 * math.sin(omega * t),
            30.0 * math.sin(2.0 * omega * t),
            10.0 * math.cos(omega * t),
        ])
        return center + offset

    return trajectory


def anchor_trajectory(drone_id: int, total: int, scenario: Scenario = DEFAULT_SCENARIO) -> Trajectory:
    """Trajectory of anchor ``drone_id`` in the given scenario."""
    scenario = Scenario(scenario)
    if scenario is Scenario.OCTAHEDRON:
        return make_octahedron_formation(drone_id)
    if scenario is Scenario.CIRCULAR_PATROL:
        return make_circular_patrol(drone_id, total)
    return make_atomic_shell(drone_id, total)


def target_trajectory(scenario: Scenario = DEFAULT_SCENARIO) -> Trajectory:
    """Trajectory of the tracked target drone in the given scenario."""
    if Scenario(scenario) is Scenario.OCTAHEDRON:
        return make_octahedron_formation(0)
    return make_figure_eight_target()