"""
Deterministic Program Simulation Harness

Drives init/update/view applications without a browser: simulated interactions,
simulated navigation, and chainable assertions over model, view and effects.
"""

__version__ = "0.1.0"
