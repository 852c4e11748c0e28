"""
Scene loading and trace export through pandas.

Scene files are CSVs with the columns kind, x, y and an optional rotation column
(degrees). Rows are placed in file order, which is also the tie-break order of
the intersector.
"""
import logging

import pandas as pd

from lightbox.Vec2 import Vec2
from lightbox.Scene import Scene
from lightbox.exceptions import SceneFileError, UnknownElementKindError

logger = logging.getLogger(__name__)

SCENE_COLUMNS = ["kind", "x", "y"]


def load_scene_frame(df : pd.DataFrame, settings=None) -> Scene:
    df = df.rename(columns=lambda c: str(c).strip().lower())
    missing = [c for c in SCENE_COLUMNS if c not in df.columns]
    if missing:
        raise SceneFileError("Scene is missing column(s): {}".format(", ".join(missing)))

    if "rotation" not in df.columns:
        df = df.assign(rotation=0.0)

    try:
        df[["x", "y", "rotation"]] = df[["x", "y", "rotation"]].astype(float)
    except ValueError as e:
        raise SceneFileError("Scene coordinates must be numeric: {}".format(e)) from e

    scene = Scene(settings)
    for row_no, row in enumerate(df.itertuples(index=False)):
        try:
            scene.AddElement(row.kind, Vec2(row.x, row.y), row.rotation)
        except UnknownElementKindError as e:
            raise SceneFileError("Row {}: {}".format(row_no, e)) from e

    logger.info("Built scene with %d element(s)", len(scene))
    return scene


def load_scene_csv(filename : str, settings=None) -> Scene:
    df = pd.read_csv(filename, comment="#", skipinitialspace=True)
    return load_scene_frame(df, settings)


def traces_to_frame(scene : Scene) -> pd.DataFrame:
    """
        Long-format table of every beam trace: beam, index, x, y.
    """
    rows = []
    for beam in scene.beams:
        for i, p in enumerate(beam.trace):
            rows.append((beam.name, i, p.x, p.y))
    return pd.DataFrame(rows, columns=["beam", "index", "x", "y"])


def save_traces_csv(scene : Scene, filename : str) -> pd.DataFrame:
    df = traces_to_frame(scene)
    df.to_csv(filename, index=False)
    logger.info("Wrote %d trace point(s) to %s", len(df), filename)
    return df
