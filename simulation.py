# simulation.py
"""
Handles the per-frame physics of the particle field.

This module defines the Simulation class, which advances the particle
system by one tick (drift, pointer attraction, edge reflection) and finds
the particle pairs close enough to be joined by a connection line. Both hot
loops are Numba kernels operating on the ParticleSystem's NumPy arrays.
"""
import logging
import numpy as np
from typing import Dict, Any, Tuple
from particle import ParticleSystem
from constants import (
    ATTRACTION_RADIUS, ATTRACTION_STRENGTH, CONNECTION_ALPHA_SCALE,
    DEFAULT_CONNECTION_DISTANCE, DEFAULT_SPATIAL_GRID_THRESHOLD
)
from numba import jit

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, params: Dict[str, Any]):
#     - Inputs:
#       - particles: An initialized ParticleSystem object.
#       - params: The "particle_field" section of config.json.
#         - "connection_distance": float, > 0
#         - "spatial_grid_threshold": int, particle count at which the
#           connection pass switches to the spatial grid.
#     - Raises: ValueError if connection_distance is not positive.
#
#   - step(self, pointer_x: float, pointer_y: float) -> None:
#     - Side Effects: Modifies positions and velocities of the internal
#       ParticleSystem in place.
#     - Invariants: Particle count remains constant. Every position is
#       clamped to [0, width] x [0, height] afterwards.
#
#   - find_connections(self) -> Tuple[np.ndarray, np.ndarray]:
#     - Outputs: (pairs, distances). pairs has shape (M, 2), dtype int64,
#       rows (i, j) with i < j sorted lexicographically; distances has
#       shape (M,) and every entry is < connection_distance.


@jit(nopython=True)
def _update_particles_numba(
    positions, velocities, pointer_x, pointer_y, width, height,
    attraction_radius, attraction_strength
):
    """
    Numba-jitted update step.

    The pointer nudges positions only, never velocities, so particles drift
    away again once the pointer leaves.
    """
    particle_count = positions.shape[0]
    for i in range(particle_count):
        positions[i, 0] += velocities[i, 0]
        positions[i, 1] += velocities[i, 1]

        dx = pointer_x - positions[i, 0]
        dy = pointer_y - positions[i, 1]
        distance = np.sqrt(dx * dx + dy * dy)

        if distance < attraction_radius:
            force = (attraction_radius - distance) / attraction_radius
            positions[i, 0] += dx * force * attraction_strength
            positions[i, 1] += dy * force * attraction_strength

        # Reflect off the edges rather than wrapping around.
        if positions[i, 0] < 0.0 or positions[i, 0] > width:
            velocities[i, 0] *= -1.0
        if positions[i, 1] < 0.0 or positions[i, 1] > height:
            velocities[i, 1] *= -1.0

        positions[i, 0] = min(max(positions[i, 0], 0.0), width)
        positions[i, 1] = min(max(positions[i, 1], 0.0), height)


@jit(nopython=True)
def _pair_connections_numba(positions, connection_distance):
    """
    Numba-jitted O(n^2) scan over every unordered pair.
    """
    particle_count = positions.shape[0]
    max_pairs = particle_count * (particle_count - 1) // 2
    pairs = np.empty((max_pairs, 2), dtype=np.int64)
    distances = np.empty(max_pairs, dtype=np.float64)
    count = 0

    for i in range(particle_count):
        for j in range(i + 1, particle_count):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance = np.sqrt(dx * dx + dy * dy)
            if distance < connection_distance:
                pairs[count, 0] = i
                pairs[count, 1] = j
                distances[count] = distance
                count += 1

    return pairs[:count], distances[:count]


@jit(nopython=True)
def _build_grid_numba(positions, grid_width, grid_height, cell_size):
    """
    Numba-jitted counting sort of particles into grid cells.

    Returns the cell of every particle, the start offset of every cell in
    `cell_particles` (with one trailing sentinel), and the particle indices
    ordered by cell.
    """
    particle_count = positions.shape[0]
    cell_count = grid_width * grid_height
    cell_of = np.empty(particle_count, dtype=np.int64)
    counts = np.zeros(cell_count, dtype=np.int64)

    for i in range(particle_count):
        cell_x = int(positions[i, 0] / cell_size)
        cell_y = int(positions[i, 1] / cell_size)
        # Particles sitting exactly on the far edge belong to the last cell.
        cell_x = min(max(cell_x, 0), grid_width - 1)
        cell_y = min(max(cell_y, 0), grid_height - 1)
        cell = cell_x + cell_y * grid_width
        cell_of[i] = cell
        counts[cell] += 1

    cell_start = np.zeros(cell_count + 1, dtype=np.int64)
    for c in range(cell_count):
        cell_start[c + 1] = cell_start[c] + counts[c]

    cursor = cell_start[:-1].copy()
    cell_particles = np.empty(particle_count, dtype=np.int64)
    for i in range(particle_count):
        cell = cell_of[i]
        cell_particles[cursor[cell]] = i
        cursor[cell] += 1

    return cell_of, cell_start, cell_particles


@jit(nopython=True)
def _grid_connections_numba(positions, connection_distance, grid_width, grid_height):
    """
    Numba-jitted connection scan using a uniform spatial grid.

    The cell size equals the connection distance, so any connected pair
    lies in the same or an adjacent cell.
    """
    cell_of, cell_start, cell_particles = _build_grid_numba(
        positions, grid_width, grid_height, connection_distance
    )
    particle_count = positions.shape[0]

    # Upper bound on the number of pairs: every particle against its
    # whole 3x3 neighbourhood.
    max_pairs = 0
    for i in range(particle_count):
        cell_x = cell_of[i] % grid_width
        cell_y = cell_of[i] // grid_width
        for ox in range(-1, 2):
            for oy in range(-1, 2):
                nx = cell_x + ox
                ny = cell_y + oy
                if nx >= 0 and nx < grid_width and ny >= 0 and ny < grid_height:
                    neighbour = nx + ny * grid_width
                    max_pairs += cell_start[neighbour + 1] - cell_start[neighbour]

    pairs = np.empty((max_pairs, 2), dtype=np.int64)
    distances = np.empty(max_pairs, dtype=np.float64)
    count = 0

    for i in range(particle_count):
        cell_x = cell_of[i] % grid_width
        cell_y = cell_of[i] // grid_width
        for ox in range(-1, 2):
            for oy in range(-1, 2):
                nx = cell_x + ox
                ny = cell_y + oy
                if nx < 0 or nx >= grid_width or ny < 0 or ny >= grid_height:
                    continue
                neighbour = nx + ny * grid_width
                for k in range(cell_start[neighbour], cell_start[neighbour + 1]):
                    j = cell_particles[k]
                    if j <= i:
                        continue
                    dx = positions[i, 0] - positions[j, 0]
                    dy = positions[i, 1] - positions[j, 1]
                    distance = np.sqrt(dx * dx + dy * dy)
                    if distance < connection_distance:
                        pairs[count, 0] = i
                        pairs[count, 1] = j
                        distances[count] = distance
                        count += 1

    return pairs[:count], distances[:count]


def find_connections(
    positions: np.ndarray,
    connection_distance: float,
    spatial_grid_threshold: int = DEFAULT_SPATIAL_GRID_THRESHOLD
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Returns every unordered pair (i, j), i < j, closer than
    `connection_distance`, together with its distance.

    Small sets are scanned pair by pair; sets of `spatial_grid_threshold`
    particles or more go through the spatial grid. Both paths return the
    same pairs in the same (lexicographic) order.
    """
    positions = np.ascontiguousarray(positions, dtype=np.float64)
    connection_distance = float(connection_distance)

    if positions.shape[0] < spatial_grid_threshold:
        return _pair_connections_numba(positions, connection_distance)

    extent_x = positions[:, 0].max() if positions.shape[0] else 0.0
    extent_y = positions[:, 1].max() if positions.shape[0] else 0.0
    grid_width = max(1, int(np.ceil(extent_x / connection_distance)))
    grid_height = max(1, int(np.ceil(extent_y / connection_distance)))

    pairs, distances = _grid_connections_numba(
        positions, connection_distance, grid_width, grid_height
    )
    order = np.lexsort((pairs[:, 1], pairs[:, 0]))
    return pairs[order], distances[order]


def connection_alpha(distances, connection_distance: float):
    """
    Line opacity for the given distance(s): CONNECTION_ALPHA_SCALE when
    touching, falling linearly to 0 at `connection_distance` and beyond.
    """
    fade = (connection_distance - np.asarray(distances, dtype=np.float64)) / connection_distance
    return np.clip(fade, 0.0, 1.0) * CONNECTION_ALPHA_SCALE


class Simulation:
    """
    Advances the particle field one tick at a time.
    """
    def __init__(self, particles: ParticleSystem, params: Dict[str, Any]):
        """
        Initializes the simulation.

        Args:
            particles (ParticleSystem): The particle system to animate.
            params (Dict[str, Any]): The particle_field section of the config.
        """
        self.particles = particles
        self.connection_distance = float(
            params.get('connection_distance', DEFAULT_CONNECTION_DISTANCE)
        )
        self.spatial_grid_threshold = int(
            params.get('spatial_grid_threshold', DEFAULT_SPATIAL_GRID_THRESHOLD)
        )
        self.attraction_radius = ATTRACTION_RADIUS
        self.attraction_strength = ATTRACTION_STRENGTH

        if self.connection_distance <= 0:
            msg = (
                f"Configuration error: connection_distance must be positive, "
                f"got {self.connection_distance}."
            )
            logging.critical(msg)
            raise ValueError(msg)

        if self.particles.capacity >= self.spatial_grid_threshold:
            logging.info(
                f"Spatial grid enabled for the connection pass: "
                f"{self.particles.capacity} particles, "
                f"cell size {self.connection_distance:.2f}px."
            )
        logging.info("Simulation logic initialized and configuration validated.")

    def step(self, pointer_x: float, pointer_y: float) -> None:
        """
        Executes one update step for every particle.
        """
        _update_particles_numba(
            self.particles.positions, self.particles.velocities,
            float(pointer_x), float(pointer_y),
            self.particles.width, self.particles.height,
            self.attraction_radius, self.attraction_strength
        )

    def find_connections(self) -> Tuple[np.ndarray, np.ndarray]:
        """Pairs of particles to join with a line this frame."""
        return find_connections(
            self.particles.positions, self.connection_distance,
            self.spatial_grid_threshold
        )
