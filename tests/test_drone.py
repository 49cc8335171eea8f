import numpy as np
import pytest

from uwbtdoa.drone import Drone
from uwbtdoa.ekf import SPEED_OF_LIGHT
from uwbtdoa.messages import RangingMeasurement

ANCHORS = [
    np.array([80.0, 0.0, 0.0]),
    np.array([-80.0, 0.0, 0.0]),
    np.array([0.0, 80.0, 0.0]),
    np.array([0.0, -80.0, 0.0]),
    np.array([0.0, 0.0, 80.0]),
    np.array([0.0, 0.0, -80.0]),
]


def _measurements(truth, tx_time, anchors=ANCHORS):
    return [
        RangingMeasurement(
            target_id=9,
            anchor_id=index + 1,
            anchor_pos=anchor,
            toa_seconds=tx_time + np.linalg.norm(truth - anchor) / SPEED_OF_LIGHT,
            is_los=True,
        )
        for index, anchor in enumerate(anchors)
    ]


def test_negative_id_rejected():
    with pytest.raises(ValueError):
        Drone(-1)


def test_update_position_follows_trajectory():
    drone = Drone(1, np.random.default_rng(0))
    drone.trajectory = lambda t: np.array([t, 2 * t, 3 * t])
    drone.update_position(2.0)
    np.testing.assert_allclose(drone.true_position, [2.0, 4.0, 6.0])


def test_update_position_without_trajectory_keeps_position():
    drone = Drone(1, np.random.default_rng(0))
    drone.true_position = np.array([1.0, 2.0, 3.0])
    drone.update_position(10.0)
    np.testing.assert_allclose(drone.true_position, [1.0, 2.0, 3.0])


def test_gps_noise_is_small():
    drone = Drone(2, np.random.default_rng(5))
    drone.true_position = np.array([10.0, 20.0, 30.0])
    fixes = np.array([drone.gps_position() for _ in range(200)])
    assert np.all(np.abs(fixes - drone.true_position) < 1.0)
    assert np.linalg.norm(fixes.mean(axis=0) - drone.true_position) < 0.05


def test_malicious_gps_shifted_along_y():
    honest = Drone(0, np.random.default_rng(42))
    spoofer = Drone(0, np.random.default_rng(42))
    spoofer.is_malicious = True
    for drone in (honest, spoofer):
        drone.true_position = np.array([5.0, 5.0, 5.0])
    np.testing.assert_allclose(spoofer.gps_position() - honest.gps_position(), [0.0, 15.0, 0.0])


def test_tdma_message_timestamp_without_drift():
    drone = Drone(3, np.random.default_rng(1))
    msg = drone.create_tdma_message(0.5)
    assert msg.sender_id == 3
    assert msg.tx_timestamp_ps == 500_000_000_000


def test_tdma_message_timestamp_includes_drift():
    plain = Drone(1, np.random.default_rng(1))
    drifting = Drone(1, np.random.default_rng(1))
    drifting.clock_drift_ns = 2.0
    delta = drifting.create_tdma_message(1.0).tx_timestamp_ps - plain.create_tdma_message(1.0).tx_timestamp_ps
    assert delta == 2000


def test_own_messages_are_ignored():
    drone = Drone(4, np.random.default_rng(0))
    drone.compute_neighbor_position(4, [1.0, 1.0, 1.0], _measurements(np.ones(3), 0.0), 1.0, 0.0)
    np.testing.assert_allclose(drone.estimated_position_of(4), np.zeros(3))
    assert drone.is_alarm_active_for(4) is False


def test_untracked_target_defaults():
    drone = Drone(1, np.random.default_rng(0))
    np.testing.assert_allclose(drone.estimated_position_of(7), np.zeros(3))
    assert drone.is_alarm_active_for(7) is False


def test_too_few_measurements_only_initialises():
    drone = Drone(1, np.random.default_rng(0))
    claimed = np.array([3.0, -2.0, 7.0])
    truth = np.array([20.0, 0.0, 0.0])
    drone.compute_neighbor_position(9, claimed, _measurements(truth, 0.0, ANCHORS[:3]), 1.0, 0.0)
    np.testing.assert_allclose(drone.estimated_position_of(9), claimed)
    assert drone.is_alarm_active_for(9) is False


def test_zero_dt_skips_update():
    drone = Drone(1, np.random.default_rng(0))
    claimed = np.array([0.0, 50.0, 0.0])
    truth = np.zeros(3)
    drone.compute_neighbor_position(9, claimed, _measurements(truth, 0.0), 0.0, 0.0)
    np.testing.assert_allclose(drone.estimated_position_of(9), claimed)


def test_consistent_claim_raises_no_alarm():
    drone = Drone(1, np.random.default_rng(0))
    truth = np.array([5.0, -3.0, 2.0])
    for step in range(1, 6):
        drone.compute_neighbor_position(9, truth, _measurements(truth, float(step)), float(step), float(step))
    assert np.linalg.norm(drone.estimated_position_of(9) - truth) < 0.5
    assert drone.is_alarm_active_for(9) is False


def test_spoofed_claim_raises_alarm():
    drone = Drone(1, np.random.default_rng(0))
    truth = np.array([1.0, 2.0, -1.0])
    claimed = truth + np.array([0.0, 50.0, 0.0])
    for step in range(1, 51):
        drone.compute_neighbor_position(9, claimed, _measurements(truth, float(step)), float(step), float(step))
    assert np.linalg.norm(drone.estimated_position_of(9) - truth) < 2.0
    assert drone.is_alarm_active_for(9) is True