"""
HoneyBear - lane-field arcade engine.

A bear collects honey and dodges bees. This package holds the simulation
only: entity models, the background movers, spawn and collision rules, the
game state machine and the save file format. Rendering and input binding
belong to the presentation layer that drives GameController.
"""

__version__ = "1.0.0"
