# MIT License (see LICENSE)
"""
Detection and merging of overlapping bodies.

After integration every pair (i, j) with i < j is tested in list order.
Two bodies overlap when the distance between their centers is less than
the sum of their radii; j is then absorbed into i:

    M   = m_i + m_j
    v_i = (m_i·v_i + m_j·v_j) / M        (momentum conserved)
    x_i = (m_i·x_i + m_j·x_j) / M        (center of mass)
    m_i = M                              (radius follows from mass)
    c_i = (c_i + c_j) // 2               (per RGB component)

The scan runs on live bodies: once i has absorbed j, later comparisons
see i's new mass, position and radius, so a cluster of mutually
overlapping bodies collapses into its lowest-index member in one pass.
Absorbed bodies are only tombstoned during the scan; they are skipped as
both i and j and removed together after the scan.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from ..types import Body, Color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeEvent:
    """
    Record of one absorption.

    Attributes:
        survivor: Id of the body that absorbed the other.
        absorbed: Id of the body that was removed.
        mass: Survivor mass after the merge.
    """
    survivor: int
    absorbed: int
    mass: float


def blend_colors(c1: Color, c2: Color) -> Color:
    """Average two colors component-wise (integer division)."""
    return (
        (c1[0] + c2[0]) // 2,
        (c1[1] + c2[1]) // 2,
        (c1[2] + c2[2]) // 2,
    )


def overlapping(a: Body, b: Body) -> bool:
    """True if the discs of a and b overlap (touching does not count)."""
    dx = b.position[0] - a.position[0]
    dy = b.position[1] - a.position[1]
    dist = math.sqrt(dx * dx + dy * dy)
    return dist < a.radius + b.radius


def absorb(survivor: Body, other: Body) -> None:
    """
    Merge `other` into `survivor` in place, conserving mass and momentum.

    `other` is left untouched; removing it is the caller's job.
    """
    m1, m2 = survivor.mass, other.mass
    total = m1 + m2
    survivor.velocity = (survivor.velocity * m1 + other.velocity * m2) / total
    survivor.position = (survivor.position * m1 + other.position * m2) / total
    survivor.mass = total
    survivor.color = blend_colors(survivor.color, other.color)


def merge_overlapping(bodies: list[Body]) -> list[MergeEvent]:
    """
    Merge every overlapping pair and drop the absorbed bodies.

    Args:
        bodies: Live body list in collection order (modified in-place).

    Returns:
        Merge events in the order they happened. Empty if nothing merged.
    """
    n = len(bodies)
    removed = [False] * n
    events: list[MergeEvent] = []

    for i in range(n):
        if removed[i]:
            continue
        a = bodies[i]
        for j in range(i + 1, n):
            if removed[j]:
                continue
            b = bodies[j]
            if overlapping(a, b):
                absorb(a, b)
                removed[j] = True
                events.append(MergeEvent(survivor=a.id, absorbed=b.id, mass=a.mass))

    if events:
        bodies[:] = [b for b, dead in zip(bodies, removed) if not dead]
        for e in events:
            logger.debug("body %d absorbed body %d (mass now %.3f)", e.survivor, e.absorbed, e.mass)
    return events
