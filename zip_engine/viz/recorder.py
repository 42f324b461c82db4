import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


class VideoRecorder:
    """Writes every rendered frame of a play window to an MP4."""

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = self.default_filename("session")

    @staticmethod
    def default_filename(prefix: str) -> str:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fname = f"zip_{prefix}_{ts}.mp4"
        if os.path.isdir("recordings"):
            return os.path.join("recordings", fname)
        return fname

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        if self.writer is None:
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, surface.get_size())
            logger.info("Recording started: %s", self.output_file)

        # surfarray is (width, height, RGB); OpenCV wants (height, width, BGR)
        frame = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
        self.writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info("Video saved: %s (%d frames)", self.output_file, self.frame_count)
            self.writer = None
