"""
Simulation settings.

Defaults mirror the interactive program: a 60 fps clock, a per-frame direction
of length 1/60 and a travel factor of 128 (a tenth of a 1280 px wide view), so a
beam moves about 2.1 scene units per frame.
"""
import logging

import numpy as np
import pandas as pd

from lightbox.exceptions import ConfigError

logger = logging.getLogger(__name__)


class SimSettings:

    DEFAULTS = {
        "frames_per_second": 60.0,
        "beam_speed": 1.0 / 60,
        "step_factor": 128.0,
        "air_index": 1.0,
        "lens_index": 1.5,
        "beam_count": 2,
        "beam_spread_degrees": 0.0,
        "max_bounces_per_frame": 32,
        "max_catchup_frames": 10,
        "enabled": True,
        "auto_reset": True,
    }

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(SimSettings.DEFAULTS)
        if unknown:
            raise ConfigError("Unknown setting(s): {}".format(", ".join(sorted(unknown))))

        for key, default in SimSettings.DEFAULTS.items():
            setattr(self, key, SimSettings._coerce(key, kwargs[key]) if key in kwargs else default)

        self.Validate()

    def __repr__(self):
        fields = ", ".join("{}={!r}".format(k, getattr(self, k)) for k in SimSettings.DEFAULTS)
        return "SimSettings({})".format(fields)

    def as_dict(self) -> dict:
        return {k: getattr(self, k) for k in SimSettings.DEFAULTS}

    def replace(self, **kwargs):
        values = self.as_dict()
        values.update(kwargs)
        return SimSettings(**values)

    def Validate(self):
        for key, default in SimSettings.DEFAULTS.items():
            if isinstance(default, bool):
                continue
            if not np.isfinite(getattr(self, key)):
                raise ConfigError("{} must be finite, got {}".format(key, getattr(self, key)))

        if self.frames_per_second <= 0:
            raise ConfigError("frames_per_second must be positive, got {}".format(self.frames_per_second))
        if self.beam_speed <= 0:
            raise ConfigError("beam_speed must be positive, got {}".format(self.beam_speed))
        if self.step_factor <= 0:
            raise ConfigError("step_factor must be positive, got {}".format(self.step_factor))
        if self.air_index <= 0 or self.lens_index <= 0:
            raise ConfigError("refractive indices must be positive")
        if self.beam_count < 1:
            raise ConfigError("beam_count must be at least 1, got {}".format(self.beam_count))
        if self.max_bounces_per_frame < 1:
            raise ConfigError("max_bounces_per_frame must be at least 1")
        if self.max_catchup_frames < 1:
            raise ConfigError("max_catchup_frames must be at least 1")

    @property
    def index_ratio(self) -> float:
        # n_incident / n_transmitted when entering lens material
        return self.air_index / self.lens_index

    @staticmethod
    def _coerce(key : str, value):
        default = SimSettings.DEFAULTS[key]
        if isinstance(default, bool):
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in ("1", "true", "yes", "on"):
                    return True
                if lowered in ("0", "false", "no", "off"):
                    return False
                raise ConfigError("Setting {} expects a boolean, got {!r}".format(key, value))
            return bool(value)
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError("Setting {} expects a number, got {!r}".format(key, value)) from e
        if isinstance(default, int):
            if not number.is_integer():
                raise ConfigError("Setting {} expects a whole number, got {!r}".format(key, value))
            return int(number)
        return number

    @staticmethod
    def from_csv(filename : str):
        """
            Loads settings from a two-column CSV (key,value). Missing keys keep their
            defaults.
        """
        df = pd.read_csv(filename, header=None, names=["key", "value"], dtype=str, comment="#")
        df = df.dropna(subset=["key"])

        values = {}
        for key, value in zip(df["key"].str.strip(), df["value"]):
            if key not in SimSettings.DEFAULTS:
                raise ConfigError("Unknown setting: {}".format(key))
            if pd.isna(value):
                raise ConfigError("Setting {} has no value".format(key))
            values[key] = value

        logger.info("Loaded %d setting(s) from %s", len(values), filename)
        return SimSettings(**values)
