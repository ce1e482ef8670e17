"""
HoopCoach — AI shot feedback synchronised to basketball video playback
======================================================================
Sends a recorded shooting session to a vision model, normalises the
shot-by-shot feedback it returns, and lines it up with the video timeline.
"""

__version__ = "1.0.0"
__app_name__ = "HoopCoach"
