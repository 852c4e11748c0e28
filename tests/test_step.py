import math

import pytest

from lightbox import Vec2, LightRay, LightRayCollision, BeamState, Ray, RayCollision, SimSettings
from lightbox import create_element, earliest_hit

from conftest import approx_vec, run


def test_free_beam_travels_straight(unit_settings, horizontal_beam):
    beam = horizontal_beam(0, 0)
    run(beam, [], unit_settings, 5)
    assert beam.position == Vec2(50, 0)
    assert [p.x for p in beam.trace] == [0, 10, 20, 30, 40, 50]
    assert beam.state == BeamState.TRAVELING


def test_step_uses_step_factor(horizontal_beam):
    settings = SimSettings(step_factor=4.0)
    beam = horizontal_beam(0, 0, speed=0.5)
    beam.Step([], settings)
    assert beam.position == Vec2(2, 0)


def test_skips_unset_zero_and_disabled(unit_settings):
    unset = LightRay(None, Vec2(10, 0))
    assert unset.Step([], unit_settings) == 0
    assert unset.position is None
    assert unset.trace == []

    still = LightRay(Vec2(1, 1), Vec2(0, 0))
    still.Step([], unit_settings)
    assert still.trace == [Vec2(1, 1)]

    off = LightRay(Vec2(0, 0), Vec2(10, 0))
    off.Step([], unit_settings.replace(enabled=False))
    assert off.position == Vec2(0, 0)


def test_mirror_reflection_in_one_frame():
    # Scenario B: 45 degree mirror, beam coming in horizontally
    settings = SimSettings(step_factor=1.0)
    mirror = create_element("Mirror", Vec2(100, 300), rotation=45)
    beam = LightRay(Vec2(0, 300), Vec2(10, 0))

    per_frame = [beam.Step([mirror], settings) for _ in range(20)]

    assert sum(per_frame) == 1
    assert max(per_frame) == 1
    assert approx_vec(beam.direction, 0, -10)

    hit_x = 100 - 5 * math.sqrt(2)
    assert any(approx_vec(p, hit_x, 300) for p in beam.trace)
    # after the hit the beam only moves straight down
    assert beam.position.x == pytest.approx(hit_x)
    assert beam.position.y < 300


def test_reflection_keeps_equal_angles():
    surface = Ray.FromPoints(Vec2(0, 10), Vec2(10, 0))
    incoming = Vec2(3, 1)
    lr_col = LightRayCollision(RayCollision(0.5, surface), incoming)

    n = surface.Normal()
    unit_in = incoming.Normalized()
    unit_out = lr_col.reflected.Normalized()

    assert unit_in.dot(n) == pytest.approx(-unit_out.dot(n))
    tangent = surface.Vector().Normalized()
    assert unit_in.dot(tangent) == pytest.approx(unit_out.dot(tangent))
    assert lr_col.reflected.Length() == pytest.approx(incoming.Length())


def test_multiple_bounces_in_one_frame_and_ceiling():
    left = create_element("Mirror", Vec2(-50, 0))
    right = create_element("Mirror", Vec2(50, 0))

    capped = LightRay(Vec2(0, 0), Vec2(200, 0))
    bounces = capped.Step([left, right], SimSettings(step_factor=1.0, max_bounces_per_frame=1))
    assert bounces == 1
    assert approx_vec(capped.position, 45, 0)

    free = LightRay(Vec2(0, 0), Vec2(200, 0))
    bounces = free.Step([left, right], SimSettings(step_factor=1.0, max_bounces_per_frame=3))
    assert bounces == 2
    assert approx_vec(free.position, 20, 0)
    assert approx_vec(free.direction, 200, 0)
    assert len(free.trace) == 4


def test_light_source_terminates_beam(unit_settings):
    # Scenario A: one frame from the seed point to the box boundary
    box = create_element("LightSource", Vec2(100, 100))
    beam = LightRay(Vec2(70, 100), Vec2(10, 0))

    beam.Step([box], unit_settings)

    assert beam.trace == [Vec2(70, 100), Vec2(75, 100)]
    assert beam.direction.is_zero()
    assert beam.state == BeamState.TERMINATED

    # frozen from now on
    beam.Step([box], unit_settings)
    assert len(beam.trace) == 2


def test_lens_refracts_by_snell(unit_settings):
    lens = create_element("ConvexLens", Vec2(100, 0))
    start, direction = Vec2(85, 3), Vec2(10, 0)
    col = earliest_hit(start, direction, [lens])
    assert col is not None and col.t < 1
    normal = col.surface_ray.Normal()

    beam = LightRay(start, direction)
    beam.Step([lens], unit_settings)

    # full, unclipped step
    assert beam.position == Vec2(95, 3)
    assert beam.direction.Length() == pytest.approx(10)
    # bent towards the axis
    assert beam.direction.y < 0

    def sine_to_normal(v):
        u = v.Normalized()
        return abs(u.x * normal.y - u.y * normal.x)

    assert sine_to_normal(direction) == pytest.approx(1.5 * sine_to_normal(beam.direction))


def test_lens_ends_frame_and_beam_leaves_unrefracted(unit_settings):
    lens = create_element("ConvexLens", Vec2(100, 0))
    beam = LightRay(Vec2(85, 3), Vec2(10, 0))
    beam.Step([lens], unit_settings)
    heading = beam.direction.copy()

    run(beam, [lens], unit_settings, 5)
    assert beam.direction == heading


def test_total_internal_reflection_reflects_instead():
    # Scenario D: index ratio 2 makes sin(theta_t) > 1 at this angle
    settings = SimSettings(step_factor=1.0, lens_index=0.5)
    lens = create_element("ConvexLens", Vec2(100, 0))
    beam = LightRay(Vec2(86, -2), Vec2(5, 5))

    beam.Step([lens], settings)

    assert not math.isnan(beam.direction.x)
    assert beam.direction.x < 0
    assert beam.direction.Length() == pytest.approx(math.hypot(5, 5))
    assert beam.state == BeamState.TRAVELING


def test_prism_is_passed_through(unit_settings):
    prism = create_element("Prism", Vec2(100, 0))
    beam = LightRay(Vec2(60, 0), Vec2(10, 0))
    run(beam, [prism], unit_settings, 3)
    assert beam.trace == [Vec2(60, 0), Vec2(70, 0), Vec2(80, 0), Vec2(90, 0)]
    assert beam.direction == Vec2(10, 0)


def test_beams_are_independent(unit_settings):
    # Scenario C
    mirror = create_element("Mirror", Vec2(100, 0), rotation=45)
    a = LightRay(Vec2(0, 0), Vec2(10, 0), name="a")
    b = LightRay(Vec2(0, 0), Vec2(10, 0).Rotate(2), name="b")

    for _ in range(30):
        a.Step([mirror], unit_settings)
        b.Step([mirror], unit_settings)

    assert a.trace is not b.trace
    assert a.trace[0] is not b.trace[0]
    assert a.trace[-1] != b.trace[-1]

    solo = LightRay(Vec2(0, 0), Vec2(10, 0), name="solo")
    run(solo, [mirror], unit_settings, 30)
    assert solo.trace == a.trace
