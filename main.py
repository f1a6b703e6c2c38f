"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the fault_proximity package.
"""

from fault_proximity.main import nearby_faults

__all__ = [
    "nearby_faults",
]
