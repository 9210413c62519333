import json

import pytest

from arcgeom.geometry.primitives import Direction2d, Point2d, Vector2d
from arcgeom.geometry.primitives3d import Direction3d, Point3d, Vector3d
from arcgeom.utils.serialization import from_dict, from_json, to_dict, to_json


@pytest.mark.parametrize("value", [
    Point2d(1.5, -2.0),
    Vector2d(0.0, 3.25),
    Direction2d.from_angle(0.7),
    Point3d(1.0, 2.0, 3.0),
    Vector3d(-1.0, 0.5, 0.0),
    Direction3d(1.0, 1.0, 1.0),
])
def test_json_round_trip(value) -> None:
    assert from_json(to_json(value)) == value


def test_dict_encoding_is_tagged() -> None:
    assert to_dict(Point2d(1.0, 2.0)) == {'type': 'Point2d', 'x': 1.0, 'y': 2.0}
    assert json.loads(to_json(Vector3d(0.0, 0.0, 1.0)))['type'] == 'Vector3d'


def test_decoding_coerces_numbers() -> None:
    assert from_dict({'type': 'Point2d', 'x': 1, 'y': '2.5'}) == Point2d(1.0, 2.5)


@pytest.mark.parametrize("data", [
    {'x': 1.0, 'y': 2.0},
    {'type': 'Circle2d', 'x': 1.0, 'y': 2.0},
    {'type': 'Point2d', 'x': 1.0},
    {'type': 'Point2d', 'x': 'one', 'y': 2.0},
    {'type': 'Direction2d', 'x': 0.0, 'y': 0.0},
])
def test_decoding_rejects_bad_input(data) -> None:
    with pytest.raises(ValueError):
        from_dict(data)


def test_encoding_rejects_unsupported_types() -> None:
    with pytest.raises(ValueError):
        to_dict((1.0, 2.0))
