"""
Aether Particles Particle Module

Target shape generation and the live-buffer morph engine.
"""
from .fields import (
    Template,
    FieldCache,
    parse_template,
    generate_field,
    circle_field,
    scatter_field,
    explosion_field,
)
from .morph_engine import MorphEngine

__all__ = [
    'Template',
    'FieldCache',
    'parse_template',
    'generate_field',
    'circle_field',
    'scatter_field',
    'explosion_field',
    'MorphEngine',
]
