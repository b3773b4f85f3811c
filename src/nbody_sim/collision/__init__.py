# MIT License (see LICENSE)
"""
Collision handling subsystem.

Colliding bodies are not bounced apart; they merge. This subpackage
provides:
    - merge_overlapping: single-pass pair scan with chain merges and
      deferred removal of absorbed bodies.
    - MergeEvent: record of one absorption.

Typical usage:
    from nbody_sim.collision import merge_overlapping

    events = merge_overlapping(bodies)
"""
from .merge import MergeEvent, absorb, blend_colors, merge_overlapping, overlapping

__all__ = [
    "MergeEvent",
    "absorb",
    "blend_colors",
    "merge_overlapping",
    "overlapping",
]
