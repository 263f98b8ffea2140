"""
Traveller Trait Compatibility

This package scores how well two travellers' personalities fit together
for shared trips.

Key Design Decisions:
- Per-trait compatibility is a step function of the absolute trait difference
- Adventure and planning reward a small difference over identical values
- Trip context (adventure type) reweights risk and the overall trait mix
- Every score is bounded to [0, 1]; scoring functions are pure
"""

__version__ = "1.0.0"
