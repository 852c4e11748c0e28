import logging
import time

from tqdm import tqdm

logger = logging.getLogger(__name__)


class FrameScheduler:
    """
        Fixed-rate frame clock driving Scene.Advance().

        The clock is any zero-argument callable returning seconds; tests pass a fake
        one to make Pump() deterministic. Tick() and RunFrames() do not read the clock.
    """

    def __init__(self, scene, clock=time.monotonic, fps : float = None):
        self.scene = scene
        self.clock = clock
        self.fps = float(fps if fps is not None else scene.settings.frames_per_second)
        self.frames = 0

        self._last = None
        self._carry = 0.0

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    def Tick(self) -> int:
        bounces = self.scene.Advance()
        self.frames += 1
        return bounces

    def RunFrames(self, n : int, progress : bool = False) -> int:
        """
            Runs n frames back to back.

            Returns:
                total mirror reflections over all frames
        """
        bounces = 0
        for _ in tqdm(range(n), desc="Simulating frames", unit="frame", disable=not progress):
            bounces += self.Tick()
        logger.info("Ran %d frame(s), %d reflection(s)", n, bounces)
        return bounces

    def Pump(self) -> int:
        """
            Runs every frame that has come due since the previous call according to the
            clock, at most settings.max_catchup_frames at once. The first call only
            starts the clock.

            Returns:
                number of frames run
        """
        now = self.clock()
        if self._last is None:
            self._last = now
            return 0

        self._carry += (now - self._last) * self.fps
        self._last = now

        due = int(self._carry)
        self._carry -= due

        cap = self.scene.settings.max_catchup_frames
        if due > cap:
            logger.debug("Dropping %d late frame(s)", due - cap)
            due = cap

        for _ in range(due):
            self.Tick()
        return due

    def Run(self, duration : float, sleep=time.sleep) -> int:
        """
            Real-time loop for `duration` seconds of clock time.
        """
        start = self.clock()
        self.Pump()
        ran = 0
        while self.clock() - start < duration:
            sleep(self.frame_interval)
            ran += self.Pump()
        return ran
