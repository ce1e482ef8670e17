"""HoopCoach data models — Pydantic schemas for shots, playback and analysis."""

from hoopcoach.models.shots import *
from hoopcoach.models.playback import *
from hoopcoach.models.analysis import *
