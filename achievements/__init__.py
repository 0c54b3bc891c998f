from .detector import (
    ACHIEVEMENTS,
    Achievement,
    AchievementDefinition,
    AchievementKind,
    HoleResult,
    classify_hole,
    detect_achievements,
    hole_results_for_round,
)
from .publisher import AchievementPublisher
from .service import AchievementReport, AchievementService

__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "AchievementDefinition",
    "AchievementKind",
    "AchievementPublisher",
    "AchievementReport",
    "AchievementService",
    "HoleResult",
    "classify_hole",
    "detect_achievements",
    "hole_results_for_round",
]
