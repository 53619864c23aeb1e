#!/usr/bin/env python3
"""
twobody - Reaction Kinematics Examples

This script demonstrates the twobody kinematics package on a few light-ion
reactions and plots the resulting energy-angle curves.

Examples:
1. 2H(2H, 1H)3H at 5 MeV: single-valued light particle, folded recoil
2. 1H(12C, 12C)1H at 60 MeV: inverse kinematics with a 4.8 degree cone
3. 7Li(1H, 1n)7Be below and above threshold
4. 12C(4He, 1n)15O with the recoil derived from nucleon balance
"""

import matplotlib.pyplot as plt
import numpy as np

from twobody import Failure, KinematicsModel, Nuclide, parse_notation

# Mass excesses in MeV (AME2020), keyed by (Z, A)
MASS_EXCESS = {
    (0, 1): "8.07132",     # 1n
    (1, 1): "7.28897",     # 1H
    (1, 2): "13.13572",    # 2H
    (1, 3): "14.94981",    # 3H
    (2, 3): "14.93122",    # 3He
    (2, 4): "2.42492",     # 4He
    (3, 6): "14.08688",    # 6Li
    (3, 7): "14.90710",    # 7Li
    (4, 7): "15.76904",    # 7Be
    (4, 9): "11.34845",    # 9Be
    (5, 10): "12.05076",   # 10B
    (6, 12): "0.0",        # 12C (reference)
    (6, 13): "3.12501",    # 13C
    (7, 14): "2.86342",    # 14N
    (8, 15): "2.85560",    # 15O
    (8, 16): "-4.73700",   # 16O
    (8, 17): "-0.80876",   # 17O
    (8, 18): "-0.78282",   # 18O
}


class MassTableIsotopes:
    """Isotope service backed by MASS_EXCESS."""

    def get_isotope(self, mass_number, atomic_number, excited_state):
        mass_excess = MASS_EXCESS.get((atomic_number, mass_number))
        if mass_excess is None:
            return None
        return Nuclide.from_mass_excess(mass_number, atomic_number, mass_excess, excited_state)


def nuclide(label, excited_state=0):
    """Nuclide from a label such as "12C"."""
    z, a = parse_notation(label)
    return Nuclide.from_mass_excess(a, z, MASS_EXCESS[(z, a)], excited_state)


def setup_plotting():
    """Configure matplotlib for publication-quality plots."""
    plt.rcParams['figure.figsize'] = (12, 8)
    plt.rcParams['font.size'] = 12
    plt.rcParams['axes.labelsize'] = 14
    plt.rcParams['axes.titlesize'] = 16
    plt.rcParams['xtick.labelsize'] = 12
    plt.rcParams['ytick.labelsize'] = 12
    plt.rcParams['legend.fontsize'] = 12


def print_summary(result):
    """Print energetics, factors and a few table rows."""
    print(f"Reaction: {result.reaction_notation}")
    print(f"Beam energy: {result.beam_energy} MeV")
    print(f"CM energy: {result.cm_energy:.4f} MeV")
    print(f"Q-value (g.s.): {result.gs_q_value:.4f} MeV")
    print(f"Q-value: {result.q_value:.4f} MeV")
    print(f"Factors: A={result.a_factor:.5f} B={result.b_factor:.5f} "
          f"C={result.c_factor:.5f} D={result.d_factor:.5f}")
    print(f"Light max angle: {np.degrees(result.light_max_angle):.3f}°")
    print(f"Heavy max angle: {np.degrees(result.heavy_max_angle):.3f}°")
    print(f"Table rows: {len(result.kinematic_table)}")
    for row in result.kinematic_table[::30]:
        print(f"  θ_lab={row.lab_angle:6.1f}°  θ_cm={row.cm_angle:8.3f}°  "
              f"E={row.lab_energy:8.3f} MeV  θ_rec={row.recoil_lab_angle:8.3f}°  "
              f"E_rec={row.recoil_lab_energy:8.3f} MeV")


def example_1_dd_p_t(model):
    """Example 1: 2H(2H, 1H)3H at 5 MeV."""
    print("=" * 60)
    print("EXAMPLE 1: 2H(2H, 1H)3H at 5 MeV")
    print("=" * 60)

    outcome = model.calculate(nuclide("2H"), nuclide("2H"), nuclide("1H"),
                              nuclide("3H"), 5.0)
    result = outcome.unwrap()
    print_summary(result)
    return result


def example_2_inverse_kinematics(model):
    """Example 2: 60 MeV 12C on hydrogen, detecting the scattered carbon."""
    print("\n" + "=" * 60)
    print("EXAMPLE 2: 1H(12C, 12C)1H at 60 MeV")
    print("=" * 60)

    outcome = model.calculate(nuclide("12C"), nuclide("1H"), nuclide("12C"),
                              nuclide("1H"), 60.0)
    result = outcome.unwrap()
    print_summary(result)
    print(f"Light series points (both branches): {len(result.light_energy_lab)}")
    return result


def example_3_threshold(model):
    """Example 3: 7Li(p,n)7Be below and above its threshold."""
    print("\n" + "=" * 60)
    print("EXAMPLE 3: 7Li(1H, 1n)7Be near threshold")
    print("=" * 60)

    energetics = model.energetics(nuclide("1H"), nuclide("7Li"), nuclide("1n"),
                                  nuclide("7Be"), 5.0).unwrap()
    print(f"Q-value: {energetics.q_value:.4f} MeV")
    print(f"Threshold energy: {energetics.threshold_energy:.4f} MeV")

    for energy in [1.0, 1.9, 2.5]:
        outcome = model.calculate(nuclide("1H"), nuclide("7Li"), nuclide("1n"),
                                  nuclide("7Be"), energy)
        if outcome.failure is Failure.ENERGETICALLY_FORBIDDEN:
            print(f"  {energy:.1f} MeV: forbidden")
        else:
            result = outcome.unwrap()
            print(f"  {energy:.1f} MeV: neutron cone "
                  f"{np.degrees(result.light_max_angle):.2f}°, "
                  f"{len(result.light_energy_lab)} series points")


def example_4_composed_recoil():
    """Example 4: 12C(4He,1n)15O with the recoil looked up by (A, Z)."""
    print("\n" + "=" * 60)
    print("EXAMPLE 4: 12C(4He, 1n)X at 30 MeV")
    print("=" * 60)

    model = KinematicsModel(isotopes=MassTableIsotopes())
    result = model.compose(nuclide("4He"), nuclide("12C"), nuclide("1n"), 30.0).unwrap()
    print_summary(result)
    return result


def plot_kinematics(results):
    """Plot lab energy per nucleon and CM angle against lab angle."""
    setup_plotting()
    fig, ((ax1, ax2), (ax3, ax4)) = plt.subplots(2, 2, figsize=(15, 12))

    for result in results:
        light = result.light_angle_lab_energy_lab
        heavy = result.heavy_angle_lab_energy_lab
        ax1.plot(light.x, light.y, '.', markersize=2, label=result.reaction_notation)
        ax2.plot(heavy.x, heavy.y, '.', markersize=2, label=result.reaction_notation)
        cm = result.light_angle_lab_angle_cm
        ax3.plot(cm.x, cm.y, '-', linewidth=2, label=result.reaction_notation)
        recoil = result.light_angle_lab_heavy_angle_lab
        ax4.plot(recoil.x, recoil.y, '-', linewidth=2, label=result.reaction_notation)

    ax1.set_xlabel('Lab Angle (degrees)')
    ax1.set_ylabel('Light Lab Energy (MeV/u)')
    ax2.set_xlabel('Lab Angle (degrees)')
    ax2.set_ylabel('Recoil Lab Energy (MeV/u)')
    ax3.set_xlabel('Lab Angle (degrees)')
    ax3.set_ylabel('C.M. Angle (degrees)')
    ax4.set_xlabel('Recoil Lab Angle (degrees)')
    ax4.set_ylabel('Light Lab Angle (degrees)')
    for ax in (ax1, ax2, ax3, ax4):
        ax.grid(True, alpha=0.3)
        ax.legend()

    plt.tight_layout()
    plt.savefig('kinematics.png', dpi=300, bbox_inches='tight')
    plt.show()

    print("  ✓ Kinematics plots saved as 'kinematics.png'")


def main():
    """Run all examples and plot the results."""
    print("twobody - Reaction Kinematics Examples")
    print("=" * 70)

    model = KinematicsModel()
    result1 = example_1_dd_p_t(model)
    result2 = example_2_inverse_kinematics(model)
    example_3_threshold(model)
    result4 = example_4_composed_recoil()

    plot_kinematics([result1, result2, result4])


if __name__ == "__main__":
    main()
