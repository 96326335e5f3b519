"""
Rostr Onboarding.

Six ordered milestones persisted as independent flags. The order of
`OnboardingStep` is the order new users are walked through.
"""

from .steps import OnboardingStep, OnboardingProgress, STEP_ORDER
from .tracker import OnboardingTracker

__all__ = [
    "OnboardingStep",
    "OnboardingProgress",
    "OnboardingTracker",
    "STEP_ORDER",
]
