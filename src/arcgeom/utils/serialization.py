"""
JSON round-tripping of plain geometric values.

Each value is encoded as an object with a "type" tag and its components, e.g.
{"type": "Point2d", "x": 1.0, "y": 2.0}. from_json(to_json(v)) == v.
"""

import json
from dataclasses import asdict, fields

from ..geometry.primitives import Direction2d, Point2d, Vector2d
from ..geometry.primitives3d import Direction3d, Point3d, Vector3d

SERIALIZABLE_TYPES = {
    cls.__name__: cls
    for cls in (Point2d, Vector2d, Direction2d, Point3d, Vector3d, Direction3d)
}


def to_dict(value) -> dict:
    """Encode a point, vector or direction as a tagged dictionary."""
    type_name = type(value).__name__
    if type_name not in SERIALIZABLE_TYPES:
        raise ValueError(f"Cannot serialize value of type {type_name}")
    return {'type': type_name, **asdict(value)}


def from_dict(data: dict):
    """Decode a tagged dictionary produced by to_dict()."""
    try:
        cls = SERIALIZABLE_TYPES[data['type']]
    except KeyError as e:
        raise ValueError(f"Unknown or missing type tag: {e}")
    try:
        return cls(**{f.name: float(data[f.name]) for f in fields(cls)})
    except KeyError as e:
        raise ValueError(f"Missing component {e} for {cls.__name__}")
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid component value for {cls.__name__}: {e}")


def to_json(value) -> str:
    return json.dumps(to_dict(value))


def from_json(text: str):
    return from_dict(json.loads(text))
