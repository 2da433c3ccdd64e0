import math

import numpy as np
import pytest

from core.config import PhysicsConfig
from core.errors import DetectionPreconditionError
from core.modes import SystemMode
from prediction.physics import (
    braking_distance,
    deceleration_for,
    is_low_speed_pair,
    position_for,
    reaction_distance,
    relative_velocity,
    safe_distance,
    separation_distances,
    stopping_distance,
)
from utils.math_ops import pairwise_distances, round_half_up
from tests.helpers import make_agent


def test_deceleration_by_vehicle_type():
    assert deceleration_for("BIKE") == 6.0
    assert deceleration_for("CAR") == 7.0
    # Unrecognized (including lower-case) types use the car constant
    assert deceleration_for("bike") == 7.0
    assert deceleration_for("TRUCK") == 7.0


def test_stopping_distance_human_car():
    assert reaction_distance(20, 1.0) == pytest.approx(20.0)
    assert braking_distance(20, 7.0) == pytest.approx(400 / 14)
    assert stopping_distance(20, "CAR", 1.0) == pytest.approx(20 + 400 / 14)


def test_stopping_distance_scales_with_control_mode():
    assert stopping_distance(20, "CAR", 0.6) == pytest.approx(12 + 400 / 14)
    assert stopping_distance(20, "CAR", 0.3) == pytest.approx(6 + 400 / 14)


def test_safe_distance_takes_larger_stop():
    car = make_agent("car", 20, x=0, y=0)
    bike = make_agent("bike", 0, x=5, y=0, vehicle_type="BIKE")
    assert safe_distance(20, car, bike, 1.0) == pytest.approx(20 + 400 / 12)


def test_relative_velocity_is_absolute():
    a = make_agent("a", 3, x=0, y=0)
    b = make_agent("b", 30, x=0, y=0)
    assert relative_velocity(a, b) == 27
    assert relative_velocity(b, a) == 27


def test_low_speed_pair_requires_both_below_threshold():
    slow = make_agent("slow", 4.9, x=0, y=0)
    also_slow = make_agent("also_slow", 0, x=0, y=0)
    at_threshold = make_agent("edge", 5, x=0, y=0)
    assert is_low_speed_pair(slow, also_slow)
    assert not is_low_speed_pair(slow, at_threshold)
    assert not is_low_speed_pair(slow, also_slow, PhysicsConfig(low_speed_threshold=1.0))


def test_position_for_missing_field_raises():
    agent = make_agent("geo_only", 10, lat=12.9, lng=77.5)
    assert position_for(agent, SystemMode.OUTDOOR) == (12.9, 77.5)
    with pytest.raises(DetectionPreconditionError) as info:
        position_for(agent, SystemMode.INDOOR)
    assert info.value.agent_id == "geo_only"
    assert info.value.field_name == "x"


def test_separation_indoor_and_outdoor():
    a = make_agent("a", 10, x=0, y=0, lat=12.90, lng=77.50)
    b = make_agent("b", 10, x=3, y=4, lat=12.90, lng=77.51)

    indoor = separation_distances([a, b], SystemMode.INDOOR)
    assert indoor.shape == (2, 2)
    assert indoor[0, 1] == pytest.approx(5.0)
    assert indoor[1, 0] == pytest.approx(5.0)
    assert np.allclose(np.diag(indoor), 0.0)

    outdoor = separation_distances([a, b], SystemMode.OUTDOOR)
    assert outdoor[0, 1] == pytest.approx(0.01 * 111000)


def test_pairwise_distances_scale():
    dist = pairwise_distances([(0, 0), (0, 2), (2, 0)], scale=10.0)
    assert dist[0, 1] == pytest.approx(20.0)
    assert dist[1, 2] == pytest.approx(np.sqrt(8) * 10)


def test_round_half_up():
    assert round_half_up(48.571428) == 48.57
    assert round_half_up(0.125) == 0.13
    assert round_half_up(10.0) == 10.0
    assert round_half_up(1.005, 1) == 1.0


def test_round_half_up_passes_non_finite_through():
    assert round_half_up(math.inf) == math.inf
    assert math.isnan(round_half_up(math.nan))
