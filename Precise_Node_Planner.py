"""
Precise Node Planner

This script runs the node-planning calculations of the precise_node package on
a stock Kerbol system scenario and prints what a maneuver planner would show.

Key Features:
    - Equatorial or target-relative AN/DN crossing times for a parking orbit
    - Patch validity check for each node (future, before the patch ends)
    - Ejection angle at each node for the craft's reference body
    - Merging a two-burn plan into a single burn
    - 3D figure of the orbit and node markers

Usage:
    Run with default settings (100 km equatorial Kerbin orbit, Minmus target):
        python Precise_Node_Planner.py

    Inclined parking orbit with equatorial nodes only:
        python Precise_Node_Planner.py --inclination 10 --lan 45 --target none

    Skip the figure:
        python Precise_Node_Planner.py --no-plot
"""

import argparse
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from precise_node import (
    constants,
    make_kerbol_system,
    circular_orbit,
    summarize_nodes,
    ManeuverNode,
    KeplerOrbit,
    apply_merge,
    format_absolute_time,
    format_distance,
    create_node_figure
)

parser = argparse.ArgumentParser(
    description='Node planning for a parking orbit in the Kerbol system',
    formatter_class=argparse.RawDescriptionHelpFormatter
)
parser.add_argument('--altitude', type=float, default=constants.PARKING_ALTITUDE_M,
                    help='Parking orbit altitude above Kerbin in metres (default: 100 km)')
parser.add_argument('--inclination', type=float, default=0.0,
                    help='Parking orbit inclination in degrees')
parser.add_argument('--lan', type=float, default=0.0,
                    help='Parking orbit longitude of ascending node in degrees')
parser.add_argument('--target', choices=['Mun', 'Minmus', 'none'], default='Minmus',
                    help='Target moon for relative nodes, or none for equatorial nodes')
parser.add_argument('--ut', type=float, default=0.0,
                    help='Current universal time in seconds')
parser.add_argument('--no-plot', action='store_true',
                    help='Do not create the node figure')
parser.add_argument('--save', action='store_true',
                    help='Save the figure into figure/figures/')
args = parser.parse_args()

FIGURE_DIR = Path(__file__).parent / "figure" / "figures"

bodies = make_kerbol_system()
kerbin = bodies["Kerbin"]
now = args.ut

parking = circular_orbit(kerbin, args.altitude, epoch=now,
                         inclination=args.inclination, lan=args.lan)
target = bodies[args.target].orbit if args.target != 'none' else None

print("=" * 60)
print(f"Parking orbit: {format_distance(args.altitude)} above {kerbin.name}, "
      f"i={args.inclination:.2f}°, LAN={args.lan:.2f}°")
print(f"Period: {parking.period:.1f} s")
print(f"Target: {args.target}")
print("=" * 60)

info = summarize_nodes(parking, now, target=target, verbose=True)

# Two prograde burns, half an orbit apart, folded into one
print("\n" + "=" * 60)
print("Merging a two-burn plan")
print("=" * 60)

t1 = now + 0.25 * parking.period
t2 = t1 + 0.5 * parking.period
r1 = parking.position_at_ut(t1)
v1 = parking.velocity_at_ut(t1)
dv1 = 50.0 * v1 / np.linalg.norm(v1)
after_first = KeplerOrbit.from_state_vectors(r1, v1 + dv1, t1, kerbin)

r2 = after_first.position_at_ut(t2)
v2 = after_first.velocity_at_ut(t2)
dv2 = 30.0 * v2 / np.linalg.norm(v2)
after_second = KeplerOrbit.from_state_vectors(r2, v2 + dv2, t2, kerbin)

first = ManeuverNode(t1, after_first, dv1)
second = ManeuverNode(t2, after_second, dv2)
plan = (first, second)
merged = apply_merge(plan, second, parking)

print(f"  Node 1 at {format_absolute_time(t1)}: |dv| = {np.linalg.norm(dv1):.2f} m/s")
print(f"  Node 2 at {format_absolute_time(t2)}: |dv| = {np.linalg.norm(dv2):.2f} m/s")
print(f"  Merged into {len(merged)} node: |dv| = {np.linalg.norm(merged[0].burn):.2f} m/s")

if not args.no_plot:
    fig = create_node_figure(parking, now, target=target)
    if args.save:
        FIGURE_DIR.mkdir(parents=True, exist_ok=True)
        name = f"nodes_{args.target.lower()}.png"
        fig.savefig(FIGURE_DIR / name, dpi=300)
        print(f"\nFigure saved to {FIGURE_DIR / name}")
    plt.show()
