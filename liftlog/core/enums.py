"""Shared enums for schemas and services."""

from enum import Enum


class MuscleGroup(str, Enum):
    """Classification tag for catalog exercises."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    FULL_BODY = "fullBody"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def _missing_(cls, value):
        # Accept display labels ("Full Body") and loose casing on read
        if isinstance(value, str):
            wanted = value.replace(" ", "").replace("_", "").lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None


_LABELS = {
    MuscleGroup.CHEST: "Chest",
    MuscleGroup.BACK: "Back",
    MuscleGroup.LEGS: "Legs",
    MuscleGroup.SHOULDERS: "Shoulders",
    MuscleGroup.ARMS: "Arms",
    MuscleGroup.CORE: "Core",
    MuscleGroup.FULL_BODY: "Full Body",
}


class PRType(str, Enum):
    """Type of personal record."""

    WEIGHT = "weight"  # Heaviest weight
    VOLUME = "volume"  # Highest volume (weight × reps)
