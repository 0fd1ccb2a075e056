"""
simharness CLI - Deterministic Program Simulation

Commands:
- simharness replay - Replay an interaction script against a program
- simharness version - Show version information
"""

__version__ = "0.1.0"
