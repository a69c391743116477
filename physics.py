# physics.py

import math
import numba

# --- JIT-Compiled Physics Functions ---
# These functions are compiled to machine code by Numba. They are kept outside
# the ParticleSystem class and operate only on NumPy arrays and simple scalar
# values, as required by Numba's nopython mode.
#
# Array layout shared by every kernel (structure of arrays, length N):
#   positions   (N, 2) float64
#   velocities  (N, 2) float64
#   radii       (N,)   float64
#   hues        (N,)   float64, each in [0, 1)
#   active      (N,)   bool
# Bucket arrays are int64 of length bucket_count.

@numba.jit(nopython=True)
def bucket_index(hue, bucket_count):
    """Maps a hue in [0, 1) onto its color bucket, clamped to [0, bucket_count)."""
    index = int(hue * bucket_count)
    if index < 0:
        return 0
    if index >= bucket_count:
        return bucket_count - 1
    return index

@numba.jit(nopython=True)
def _update_particle_jit(position, velocity, radius, dt, width, height, restitution, friction):
    """
    Integrates one particle and resolves wall contact in place.

    Each axis is handled independently: a wall crossing clamps the particle to
    the wall and reflects that velocity component scaled by restitution.
    Friction is applied once, after both axes.
    """
    position[0] += velocity[0] * dt
    position[1] += velocity[1] * dt

    # Left / right walls
    if position[0] - radius < 0.0:
        position[0] = radius
        velocity[0] = -velocity[0] * restitution
    elif position[0] + radius > width:
        position[0] = width - radius
        velocity[0] = -velocity[0] * restitution

    # Top / bottom walls
    if position[1] - radius < 0.0:
        position[1] = radius
        velocity[1] = -velocity[1] * restitution
    elif position[1] + radius > height:
        position[1] = height - radius
        velocity[1] = -velocity[1] * restitution

    velocity[0] *= friction
    velocity[1] *= friction

@numba.jit(nopython=True)
def _integrate_jit(positions, velocities, radii, active, dt, width, height, restitution, friction):
    """Runs the per-particle update over every active particle."""
    for i in range(positions.shape[0]):
        if active[i]:
            _update_particle_jit(
                positions[i], velocities[i], radii[i],
                dt, width, height, restitution, friction
            )

@numba.jit(nopython=True)
def _resolve_collision_jit(i, j, positions, velocities, radii, hues, active,
                           active_counts, collision_counts, bucket_count,
                           restitution, min_radius, size_ratio_limit,
                           transfer_enabled, double_count_same_bucket):
    """
    Detects and resolves a collision between particles i and j in place.

    Returns a (contact, retired) pair of ints: contact is 1 when the pair
    overlapped and was counted, retired is the number of particles switched
    to inactive by this call. Coincident centres are treated as no contact.
    """
    dx = positions[j, 0] - positions[i, 0]
    dy = positions[j, 1] - positions[i, 1]
    distance = math.sqrt(dx * dx + dy * dy)

    if distance >= radii[i] + radii[j] or distance == 0.0:
        return 0, 0

    # 1. Record the collision for both color buckets
    bucket_i = bucket_index(hues[i], bucket_count)
    bucket_j = bucket_index(hues[j], bucket_count)
    collision_counts[bucket_i] += 1
    if bucket_i != bucket_j or double_count_same_bucket:
        collision_counts[bucket_j] += 1

    # 2. Size transfer. Ties go to i as the growing side.
    if transfer_enabled:
        if radii[i] >= radii[j]:
            big, small = i, j
        else:
            big, small = j, i

        if radii[big] >= size_ratio_limit * radii[small]:
            active[small] = False
            return 1, 1

        scale = 0.5 * min(active_counts[bucket_i], active_counts[bucket_j])
        transfer = scale * scale
        small_area = radii[small] * radii[small] - transfer
        if small_area < min_radius * min_radius:
            active[small] = False
            return 1, 1

        radii[big] = math.sqrt(radii[big] * radii[big] + transfer)
        radii[small] = math.sqrt(small_area)

    # 3. Symmetric positional correction along the contact normal
    nx = dx / distance
    ny = dy / distance
    half_overlap = 0.5 * (radii[i] + radii[j] - distance)
    positions[i, 0] -= nx * half_overlap
    positions[i, 1] -= ny * half_overlap
    positions[j, 0] += nx * half_overlap
    positions[j, 1] += ny * half_overlap

    # 4. Impulse response with unit masses
    rvx = velocities[j, 0] - velocities[i, 0]
    rvy = velocities[j, 1] - velocities[i, 1]
    vn = rvx * nx + rvy * ny
    if vn > 0.0:
        # Already separating
        return 1, 0

    impulse = -(1.0 + restitution) * vn / (1.0 / 1.0 + 1.0 / 1.0)
    velocities[i, 0] -= impulse * nx
    velocities[i, 1] -= impulse * ny
    velocities[j, 0] += impulse * nx
    velocities[j, 1] += impulse * ny
    return 1, 0

@numba.jit(nopython=True)
def _handle_collisions_jit(positions, velocities, radii, hues, active,
                           active_counts, collision_counts, bucket_count,
                           restitution, min_radius, size_ratio_limit,
                           transfer_enabled, double_count_same_bucket):
    """
    Single all-pairs resolution pass in ascending (i, j) order with i < j.
    Returns the total number of contacts and retirements for the pass.
    """
    total_contacts = 0
    total_retired = 0
    n = positions.shape[0]

    for i in range(n):
        if not active[i]:
            continue
        for j in range(i + 1, n):
            if not active[i]:
                # i was retired by an earlier pair in this row
                break
            if not active[j]:
                continue
            contact, retired = _resolve_collision_jit(
                i, j, positions, velocities, radii, hues, active,
                active_counts, collision_counts, bucket_count,
                restitution, min_radius, size_ratio_limit,
                transfer_enabled, double_count_same_bucket
            )
            total_contacts += contact
            total_retired += retired
    return total_contacts, total_retired
