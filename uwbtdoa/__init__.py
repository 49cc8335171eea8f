"""Drones, UWB channel, trajectories and EKF for TDoA localization and GPS-spoofing detection."""

__version__ = "0.1.0"