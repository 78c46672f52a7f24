"""
Export target devices.
"""

from enum import Enum


class DeviceId(str, Enum):
    """Devices and platforms a workout can be exported to."""

    GARMIN = "garmin"
    APPLE = "apple"
    SUUNTO = "suunto"
    POLAR = "polar"
    COROS = "coros"
    WAHOO = "wahoo"
    TRAININGPEAKS = "trainingpeaks"
    STRAVA = "strava"
    ZWIFT = "zwift"
    TRAINERROAD = "trainerroad"
    FINAL_SURGE = "final-surge"
    WHOOP = "whoop"
    FITBIT = "fitbit"
    OURA = "oura"
    PELOTON = "peloton"
    CONCEPT2 = "concept2"


# Devices whose exports keep the pre-mapping exercise name in the notes.
DEFAULT_TRACEABLE_DEVICES = frozenset({DeviceId.GARMIN.value})
