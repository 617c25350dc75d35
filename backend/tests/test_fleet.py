from cruisecast.services.aggregator import compute_profile
from cruisecast.services.fleet import BEHAVIORS, DEFAULT_LAYOUT, fit_layout, generate_fleet


def test_fleet_has_one_point_per_waypoint_per_vehicle(stuttgart):
    fleet = generate_fleet(stuttgart, vehicle_count=5, seed=1)
    assert len(fleet) == 35
    assert {p.vehicle_id for p in fleet} == {f"car-{n}" for n in range(1, 6)}
    first = [p for p in fleet if p.vehicle_id == "car-1"]
    assert [(p.lat, p.lng) for p in first] == stuttgart.pairs()
    assert first[1].timestamp - first[0].timestamp == 1000


def test_speeds_stay_within_behavior_band(stuttgart):
    for p in generate_fleet(stuttgart, vehicle_count=50, seed=2):
        b = BEHAVIORS[p.behavior]
        assert b["base_speed"] - b["variance"] <= p.speed <= b["base_speed"] + b["variance"]


def test_seed_is_reproducible(stuttgart):
    a = [p.speed for p in generate_fleet(stuttgart, vehicle_count=10, seed=42)]
    b = [p.speed for p in generate_fleet(stuttgart, vehicle_count=10, seed=42)]
    assert a == b


def test_fleet_profile_follows_layout(stuttgart):
    profile = compute_profile(generate_fleet(stuttgart, vehicle_count=200, seed=3), stuttgart)
    speeds = profile.avg_speeds()
    assert all(35 <= s <= 45 for s in speeds[:2])
    assert all(50 <= s <= 60 for s in speeds[2:5])
    assert all(65 <= s <= 75 for s in speeds[5:])
    assert all(s.sample_count == 200 for s in profile.segments)


def test_fit_layout():
    assert fit_layout(DEFAULT_LAYOUT, 7) == DEFAULT_LAYOUT
    assert fit_layout(DEFAULT_LAYOUT, 3) == ["slow", "medium", "medium"]
    stretched = fit_layout(DEFAULT_LAYOUT, 14)
    assert len(stretched) == 14
    assert stretched[:4] == ["slow"] * 4
    assert stretched[-4:] == ["fast"] * 4
    assert fit_layout(DEFAULT_LAYOUT, 0) == []
