import pandas as pd
import pytest

from lightbox import SimSettings, ConfigError, SceneFileError, ElementKind, Vec2, Scene
from lightbox.scene_io import load_scene_csv, load_scene_frame, traces_to_frame, save_traces_csv


def test_defaults():
    s = SimSettings()
    assert s.frames_per_second == 60
    assert s.step_factor == 128.0
    assert s.beam_count == 2
    assert s.index_ratio == pytest.approx(1 / 1.5)


def test_invalid_values_raise():
    with pytest.raises(ConfigError):
        SimSettings(beam_count=0)
    with pytest.raises(ConfigError):
        SimSettings(lens_index=-1.0)
    with pytest.raises(ConfigError):
        SimSettings(warp_drive=True)


@pytest.mark.parametrize("key", ["beam_speed", "step_factor", "lens_index", "beam_spread_degrees"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_values_raise(key, value):
    with pytest.raises(ConfigError):
        SimSettings(**{key: value})


def test_whole_number_settings_are_not_truncated():
    assert SimSettings(beam_count=3.0).beam_count == 3
    assert isinstance(SimSettings(beam_count=3.0).beam_count, int)
    with pytest.raises(ConfigError):
        SimSettings(beam_count=2.7)
    with pytest.raises(ConfigError):
        SimSettings(max_bounces_per_frame="4.5")


def test_replace_validates():
    s = SimSettings()
    assert s.replace(beam_count=5).beam_count == 5
    assert s.beam_count == 2
    with pytest.raises(ConfigError):
        s.replace(step_factor=0)


def test_settings_from_csv(tmp_path):
    path = tmp_path / "settings.csv"
    path.write_text("# tuned for a small view\n"
                    "beam_count,4\n"
                    "lens_index,1.33\n"
                    "auto_reset,no\n")

    s = SimSettings.from_csv(str(path))
    assert s.beam_count == 4
    assert isinstance(s.beam_count, int)
    assert s.lens_index == pytest.approx(1.33)
    assert s.auto_reset is False
    assert s.air_index == 1.0


def test_settings_csv_rejects_unknown_and_bad_values(tmp_path):
    unknown = tmp_path / "unknown.csv"
    unknown.write_text("gravity,9.81\n")
    with pytest.raises(ConfigError):
        SimSettings.from_csv(str(unknown))

    bad = tmp_path / "bad.csv"
    bad.write_text("beam_speed,fast\n")
    with pytest.raises(ConfigError):
        SimSettings.from_csv(str(bad))


def test_settings_csv_rejects_empty_and_fractional_values(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("beam_speed,\nbeam_count,1\n")
    with pytest.raises(ConfigError):
        SimSettings.from_csv(str(empty))

    infinite = tmp_path / "infinite.csv"
    infinite.write_text("step_factor,inf\n")
    with pytest.raises(ConfigError):
        SimSettings.from_csv(str(infinite))

    fractional = tmp_path / "fractional.csv"
    fractional.write_text("beam_count,2.7\n")
    with pytest.raises(ConfigError):
        SimSettings.from_csv(str(fractional))


def test_load_scene_csv_keeps_file_order(tmp_path):
    path = tmp_path / "scene.csv"
    path.write_text("kind,x,y,rotation\n"
                    "LightSource,100,300,0\n"
                    "Mirror,400,300,45\n"
                    "convex lens,400,100,90\n")

    scene = load_scene_csv(str(path), SimSettings(beam_count=1))
    kinds = [e.kind for e in scene.Elements()]
    assert kinds == [ElementKind.LIGHT_SOURCE, ElementKind.MIRROR, ElementKind.CONVEX_LENS]
    assert scene.Elements()[1].rotation == 45
    assert scene.beams[0].position == Vec2(125, 300)


def test_load_scene_without_rotation_column():
    df = pd.DataFrame({"Kind": ["Prism"], "X": [1], "Y": [2]})
    scene = load_scene_frame(df)
    assert scene.Elements()[0].rotation == 0.0
    assert scene.Elements()[0].center == Vec2(1, 2)


def test_load_scene_errors():
    with pytest.raises(SceneFileError):
        load_scene_frame(pd.DataFrame({"kind": ["Mirror"], "x": [1]}))
    with pytest.raises(SceneFileError):
        load_scene_frame(pd.DataFrame({"kind": ["Hologram"], "x": [1], "y": [2]}))
    with pytest.raises(SceneFileError):
        load_scene_frame(pd.DataFrame({"kind": ["Mirror"], "x": ["left"], "y": [2]}))


def test_traces_export(tmp_path):
    scene = Scene(SimSettings(step_factor=1.0, beam_speed=5.0, beam_count=2))
    scene.AddElement("LightSource", Vec2(0, 0))
    scene.Advance()
    scene.Advance()

    df = traces_to_frame(scene)
    assert list(df.columns) == ["beam", "index", "x", "y"]
    assert len(df) == 6
    assert list(df[df["beam"] == "beam0"]["x"]) == [25.0, 30.0, 35.0]

    out = tmp_path / "traces.csv"
    save_traces_csv(scene, str(out))
    assert pd.read_csv(out).shape == (6, 4)
