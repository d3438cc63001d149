"""Simulated logistics invoice extraction: staged pipeline, previews, and exports.

- ``schemas``: records, enums, and state snapshots
- ``pipeline``: the stage schedule and sequencer
- ``materializer``: sample or synthesized result records
- ``exporter`` / ``overlays``: export lifecycle and overlay exclusivity
- ``session``: single owner of all state, used by ``api`` and ``cli``
"""

__all__ = [
    "config",
    "schemas",
    "scheduler",
    "pipeline",
    "materializer",
    "exporter",
    "overlays",
    "session",
]
