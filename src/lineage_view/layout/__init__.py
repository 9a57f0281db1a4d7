"""
Layout modules: force simulation and edge routing.
"""

from .forces import CenterForce, CollideForce, Force, LinkForce, PositionXForce, PositionYForce
from .routing import CurvePath, EdgeRouter
from .simulation import ForceSimulation, create_force_simulation

__all__ = [
    "Force", "LinkForce", "CollideForce", "PositionXForce", "PositionYForce", "CenterForce",
    "ForceSimulation", "create_force_simulation",
    "CurvePath", "EdgeRouter",
]
