import pytest

from lightbox import Vec2, LightRay, SimSettings


def approx_vec(v, x, y, abs=1e-9):
    return v.x == pytest.approx(x, abs=abs) and v.y == pytest.approx(y, abs=abs)


class FakeClock:

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def unit_settings():
    # direction vectors are used as-is for the per-frame step
    return SimSettings(step_factor=1.0, beam_speed=10.0, beam_count=1)


@pytest.fixture
def fake_clock():
    return FakeClock()


def run(beam, elements, settings, frames):
    bounces = 0
    for _ in range(frames):
        bounces += beam.Step(elements, settings)
    return bounces


@pytest.fixture
def horizontal_beam():
    def _make(x, y, speed=10.0):
        return LightRay(Vec2(x, y), Vec2(speed, 0.0))
    return _make
