# particle.py
"""
Manages the state of all particles in the field.

This module defines the ParticleSystem class, which is responsible for
generating and storing particle data (position, velocity, radius) in
NumPy arrays. The whole set is regenerated whenever the drawing surface
changes size; particles are never added or removed individually.
"""
import logging
import numpy as np
from typing import Optional

from constants import MAX_INITIAL_SPEED, PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, capacity: int, width: float, height: float, seed: Optional[int] = None):
#     - Inputs:
#       - capacity: number of particles, >= 0.
#       - width, height: current surface dimensions, >= 0.
#       - seed: optional master seed for reproducible layouts.
#     - Side Effects: Generates the initial particle arrays.
#     - Raises: ValueError if capacity is negative.
#
#   - regenerate(self, width: float, height: float) -> None:
#     - Side Effects: Replaces every array wholesale for the new bounds.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64,
#         with every row inside [0, width] x [0, height].
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64,
#         every component inside [-MAX_INITIAL_SPEED, MAX_INITIAL_SPEED].
#       - self.radii is a NumPy array of shape (N,) of dtype float64,
#         inside [PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX).
#       - N == self.capacity.


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, capacity: int, width: float, height: float, seed: Optional[int] = None):
        if capacity < 0:
            msg = f"Configuration error: particle capacity must be >= 0, got {capacity}."
            logging.critical(msg)
            raise ValueError(msg)

        self.capacity = int(capacity)
        self.seed = seed

        # All randomness for this system comes from one RNG built from the seed.
        self.rng = np.random.default_rng(seed)

        self.width = 0.0
        self.height = 0.0
        self.regenerate(width, height)

        logging.info(
            f"ParticleSystem initialized with {self.capacity} particles "
            f"(seed={self.seed})."
        )

    def regenerate(self, width: float, height: float) -> None:
        """
        Discards the current particles and creates a fresh set over the
        given bounds.
        """
        self.width = float(max(width, 0))
        self.height = float(max(height, 0))

        self.positions = self.rng.uniform(
            low=[0.0, 0.0],
            high=[self.width, self.height],
            size=(self.capacity, 2)
        )
        self.velocities = self.rng.uniform(
            low=-MAX_INITIAL_SPEED,
            high=MAX_INITIAL_SPEED,
            size=(self.capacity, 2)
        )
        self.radii = self.rng.uniform(
            low=PARTICLE_RADIUS_MIN,
            high=PARTICLE_RADIUS_MAX,
            size=self.capacity
        )

        logging.debug(
            f"Particle arrays regenerated for {self.width:.0f}x{self.height:.0f}. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}, "
            f"Radii shape: {self.radii.shape}"
        )

    def set_state(self, positions, velocities=None, radii=None) -> None:
        """
        Replaces the particle arrays with explicit values, e.g. to replay a
        known layout. Omitted arrays are zeroed (velocities) or set to the
        minimum radius.
        """
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        count = positions.shape[0]
        if velocities is None:
            velocities = np.zeros((count, 2), dtype=np.float64)
        if radii is None:
            radii = np.full(count, PARTICLE_RADIUS_MIN, dtype=np.float64)

        self.positions = positions
        self.velocities = np.array(velocities, dtype=np.float64).reshape(count, 2)
        self.radii = np.array(radii, dtype=np.float64).reshape(count)
        self.capacity = count

    def __len__(self) -> int:
        return self.positions.shape[0]
