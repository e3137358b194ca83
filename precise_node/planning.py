"""
One-call node report for a craft orbit, optionally against a target orbit.
"""

import math

from .formatting import format_absolute_time, format_angle, format_duration
from .geometry import Node, ejection_angle, is_ut_inside_patch, node_ut


def summarize_nodes(orbit, now, target=None, verbose=False):
    """
    Compute AN/DN crossings and their derived quantities.

    Args:
        orbit: Craft orbit patch
        now: Current universal time
        target: Target orbit, or None for the equatorial nodes
        verbose: Print the report

    Returns:
        dict: an_ut, dn_ut, has_an, has_dn, time_to_an, time_to_dn,
            ejection_angle_an, ejection_angle_dn and formatted strings
    """
    info = {"reference": "target" if target is not None else "equatorial"}

    for key, node in (("an", Node.ASCENDING), ("dn", Node.DESCENDING)):
        ut = node_ut(orbit, target, node, after=now)
        valid = is_ut_inside_patch(orbit, ut, now)

        if getattr(orbit.reference_body, "orbit", None) is not None and math.isfinite(ut):
            eangle = ejection_angle(orbit, ut)
        else:
            eangle = math.nan

        info.update({
            f"{key}_ut": ut,
            f"has_{key}": valid,
            f"time_to_{key}": ut - now,
            f"ejection_angle_{key}": eangle,
            f"{key}_time_str": format_absolute_time(ut) if valid else "N/A",
            f"{key}_eta_str": format_duration(ut - now) if valid else "N/A",
        })

    if verbose:
        print(f"Nodes ({info['reference']}) around {orbit.reference_body.name}, "
              f"now = {format_absolute_time(now)}")
        for key in ("an", "dn"):
            line = f"  {key.upper()}: {info[f'{key}_time_str']} (in {info[f'{key}_eta_str']})"
            if math.isfinite(info[f"ejection_angle_{key}"]):
                line += f" | ejection {format_angle(info[f'ejection_angle_{key}'])}"
            print(line)

    return info
