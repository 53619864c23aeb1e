"""
Core float kernels for the classical kinematics sweep.

These run on plain float64 arrays; all rest-mass arithmetic has already been
done in Decimal by the factor solver.

Functions:
    round_half_up: Round half away from zero at a fixed number of decimals
    branch_energies: Lab energy on one root of the kinematic quadratic
    select_cm_angle: Pick the acute or obtuse CM angle from a neighbour test
    cm_angles: CM angle of the light particle along a sweep
    recoil_angles: Lab angle of the companion recoil along a sweep
"""

import numpy as np
from numba import jit


@jit(nopython=True)
def round_half_up(value, digits):
    """
    Round to ``digits`` decimals as floor(x * 10^digits + 0.5) / 10^digits.

    Halves always round up (1.0005 -> 1.001), unlike Python's round().
    """
    scale = 10.0 ** digits
    return np.floor(value * scale + 0.5) / scale


@jit(nopython=True)
def round_array_half_up(values, digits):
    scale = 10.0 ** digits
    out = np.empty(values.shape[0])
    for i in range(values.shape[0]):
        out[i] = np.floor(values[i] * scale + 0.5) / scale
    return out


@jit(nopython=True)
def branch_energies(total_energy, scale, ratio, angles_rad, sign):
    """
    Lab energy E_T * scale * (cos(theta) + sign * sqrt(ratio - sin^2(theta)))^2.

    Args:
        total_energy: E_T = E_beam + Q in MeV
        scale: B for the light particle, A for the heavy one
        ratio: D/B for the light particle, C/A for the heavy one
        angles_rad: Lab angles in radians
        sign: +1.0 for the forward root, -1.0 for the folded root

    Returns:
        Array of energies in MeV; NaN where the angle lies outside the cone
    """
    n = angles_rad.shape[0]
    energies = np.empty(n)
    for i in range(n):
        s = np.sin(angles_rad[i])
        radicand = ratio - s * s
        if radicand < 0.0:
            energies[i] = np.nan
        else:
            root = np.cos(angles_rad[i]) + sign * np.sqrt(radicand)
            energies[i] = total_energy * scale * root * root
    return energies


@jit(nopython=True)
def select_cm_angle(value, neighbour_value, pi):
    """
    Resolve the two-valued asin for a CM angle.

    ``value`` is sin(theta_cm) at the lab angle and ``neighbour_value`` the
    same quantity one finite-difference step further out. If it grows with
    angle the acute solution applies, otherwise the obtuse one. A NaN
    neighbour (the step left the cone) selects the obtuse solution.
    """
    if value > 1.0:
        value = 1.0
    elif value < -1.0:
        value = -1.0
    if neighbour_value > value:
        return np.arcsin(value)
    return pi - np.arcsin(value)


@jit(nopython=True)
def cm_angles(energies, neighbour_energies, angles_rad, step, total_energy, d, pi):
    """
    CM angle (radians) of the light particle at each lab angle.

    sin(theta_cm) = sqrt(E / (E_T * D)) * sin(theta); the neighbour energies
    are evaluated at theta + step on the same branch.
    """
    n = angles_rad.shape[0]
    out = np.empty(n)
    norm = total_energy * d
    for i in range(n):
        value = np.sqrt(energies[i] / norm) * np.sin(angles_rad[i])
        neighbour = np.sqrt(neighbour_energies[i] / norm) * np.sin(angles_rad[i] + step)
        out[i] = select_cm_angle(value, neighbour, pi)
    return out


@jit(nopython=True)
def recoil_angles(light_energies, heavy_energies, angles_rad, mass_ratio):
    """
    Lab angle (radians) of the recoil partnering each light-particle point.

    sin(theta_heavy) = sqrt(m_light * E_light / (m_heavy * E_heavy)) * sin(theta)
    """
    n = angles_rad.shape[0]
    out = np.empty(n)
    for i in range(n):
        x = np.sqrt(mass_ratio * light_energies[i] / heavy_energies[i]) * np.sin(angles_rad[i])
        if x > 1.0:
            x = 1.0
        out[i] = np.arcsin(x)
    return out
