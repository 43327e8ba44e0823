"""Forces, energies, time stepping and mesh-scheme input for a triangulated membrane budding model."""

__version__ = "0.1.0"