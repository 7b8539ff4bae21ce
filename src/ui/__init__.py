"""
Aether Particles UI Module

PyQt5 particle renderer and main window.
"""
from .particle_view import ParticleView, project_points
from .main_window import ParticleWindow, PALETTE

__all__ = [
    'ParticleView',
    'project_points',
    'ParticleWindow',
    'PALETTE',
]
