"""
Procedural target point fields.

Every field is a float32 array of shape (count, 3). Shapes that use random
placement draw from the supplied numpy Generator, so a field is fixed once
generated; callers cache it instead of regenerating per frame.
"""
from enum import Enum
from typing import Optional, Union

import numpy as np


class Template(Enum):
    """User-selectable shape templates."""
    HEART = "HEART"
    FLOWER = "FLOWER"
    SATURN = "SATURN"
    BUDDHA = "BUDDHA"
    FIREWORKS = "FIREWORKS"


# Saturn / Buddha proportions
PLANET_SHARE = 0.4
PLANET_RADIUS = 8.0
RING_INNER = 12.0
RING_OUTER = 18.0
RING_FLATTEN = 0.2
BODY_SHARE = 0.7


def parse_template(value: Union[str, Template, None]) -> Optional[Template]:
    """Template from a name like 'saturn'; None if the name is unknown."""
    if isinstance(value, Template):
        return value
    if value is None:
        return None
    try:
        return Template(str(value).strip().upper())
    except ValueError:
        return None


def _sphere_directions(count: int, rng: np.random.Generator):
    """Uniform spherical angles: phi via inverse cosine, theta uniform."""
    phi = np.arccos(2 * rng.random(count) - 1)
    theta = rng.random(count) * 2 * np.pi
    return phi, theta


def _spherical(radius, phi, theta) -> np.ndarray:
    return np.stack([
        radius * np.sin(phi) * np.cos(theta),
        radius * np.sin(phi) * np.sin(theta),
        radius * np.cos(phi),
    ], axis=1)


def _heart(count, rng):
    t = np.arange(count) / count * 2 * np.pi
    x = 16 * np.sin(t) ** 3
    y = 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t)
    z = (rng.random(count) - 0.5) * 4
    return np.stack([x, y, z], axis=1)


def _flower(count, rng, petals=6):
    t = np.arange(count) / count * 2 * np.pi
    r = 15 * np.sin(petals * t)
    z = (rng.random(count) - 0.5) * 5
    return np.stack([r * np.cos(t), r * np.sin(t), z], axis=1)


def _saturn(count, rng):
    planet = int(np.ceil(count * PLANET_SHARE))
    ring = count - planet

    phi, theta = _sphere_directions(planet, rng)
    sphere = _spherical(PLANET_RADIUS, phi, theta)

    radius = RING_INNER + (RING_OUTER - RING_INNER) * rng.random(ring)
    angle = rng.random(ring) * 2 * np.pi
    annulus = np.stack([
        radius * np.cos(angle),
        radius * np.sin(angle) * RING_FLATTEN,  # tilt
        radius * np.sin(angle),
    ], axis=1)

    return np.concatenate([sphere, annulus])


def _buddha(count, rng):
    body = int(np.ceil(count * BODY_SHARE))
    head = count - body

    # Cone tapering linearly with height
    h = rng.random(body)
    w = (1 - h) * 15
    angle = rng.random(body) * 2 * np.pi
    cone = np.stack([np.cos(angle) * w, h * 12 - 5, np.sin(angle) * w], axis=1)

    phi, theta = _sphere_directions(head, rng)
    sphere = _spherical(3.0, phi, theta)
    sphere[:, 1] += 10

    return np.concatenate([cone, sphere])


def _fireworks(count, rng):
    phi, theta = _sphere_directions(count, rng)
    radius = 20 * rng.random(count)
    return _spherical(radius, phi, theta)


def _cube(count, rng):
    return (rng.random((count, 3)) - 0.5) * 40


_GENERATORS = {
    Template.HEART: _heart,
    Template.FLOWER: _flower,
    Template.SATURN: _saturn,
    Template.BUDDHA: _buddha,
    Template.FIREWORKS: _fireworks,
}


def generate_field(template, count: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Rest shape for a template.

    Args:
        template: Template or template name; unknown names give a random cube
        count: Number of particles
        rng: Random source for jitter and sampling

    Returns:
        (count, 3) float32 array
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    rng = rng if rng is not None else np.random.default_rng()

    generator = _GENERATORS.get(parse_template(template), _cube)
    return generator(count, rng).astype(np.float32).reshape(count, 3)


def circle_field(count: int, radius: float = 15.0, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Flat ring in the x/y plane with a little depth jitter."""
    rng = rng if rng is not None else np.random.default_rng()
    t = np.arange(count) / max(count, 1) * 2 * np.pi
    z = (rng.random(count) - 0.5) * 0.5
    return np.stack([radius * np.cos(t), radius * np.sin(t), z], axis=1).astype(np.float32)


def scatter_field(count: int, radius: float = 60.0, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Idle cloud: points spread through a large sphere volume."""
    rng = rng if rng is not None else np.random.default_rng()
    phi, theta = _sphere_directions(count, rng)
    r = radius * np.cbrt(rng.random(count))
    return _spherical(r, phi, theta).astype(np.float32).reshape(count, 3)


def explosion_field(count: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Unit-scale burst: sphere directions times a per-particle factor in [0.2, 1)."""
    rng = rng if rng is not None else np.random.default_rng()
    phi, theta = _sphere_directions(count, rng)
    factor = 0.2 + 0.8 * rng.random(count)
    return _spherical(factor, phi, theta).astype(np.float32).reshape(count, 3)


class FieldCache:
    """Holds the field for the selected template; regenerates only on change."""

    def __init__(self, count: int, rng: Optional[np.random.Generator] = None):
        self._count = count
        self._rng = rng if rng is not None else np.random.default_rng()
        self._template = None
        self._field: Optional[np.ndarray] = None

    def get(self, template) -> np.ndarray:
        key = parse_template(template) or str(template)
        if self._field is None or key != self._template:
            self._template = key
            self._field = generate_field(template, self._count, self._rng)
            self._field.setflags(write=False)
        return self._field

    @property
    def template(self):
        return self._template
