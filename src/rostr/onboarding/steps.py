"""
Onboarding steps and progress.

Steps are declared in priority order: welcome before account, account
before circle, roster before inviting friends. Reordering or adding a step
is a change to this enum only.
"""

from dataclasses import dataclass, field
from enum import Enum


class OnboardingStep(Enum):
    """Onboarding milestones, in the order they are presented."""
    WELCOME = "welcome"
    CREATE_ACCOUNT = "create-account"
    CREATE_CIRCLE = "create-circle"
    ADD_ROSTER = "add-roster"
    INVITE_FRIENDS = "invite-friends"
    COACH_MARKS = "coach-marks"

    @property
    def storage_key(self) -> str:
        return STORAGE_KEYS[self]


STORAGE_KEYS: dict[OnboardingStep, str] = {
    OnboardingStep.WELCOME: "has_seen_welcome",
    OnboardingStep.CREATE_ACCOUNT: "has_created_account",
    OnboardingStep.CREATE_CIRCLE: "has_created_circle",
    OnboardingStep.ADD_ROSTER: "has_added_roster",
    OnboardingStep.INVITE_FRIENDS: "has_invited_friends",
    OnboardingStep.COACH_MARKS: "has_seen_coach_marks",
}

STEP_ORDER: tuple[OnboardingStep, ...] = tuple(OnboardingStep)

# Written by older app builds; only ever cleared.
LEGACY_COMPLETE_KEY = "onboarding_complete"


@dataclass(frozen=True)
class OnboardingProgress:
    """Snapshot of which onboarding steps are done."""
    completed: frozenset[OnboardingStep] = field(default_factory=frozenset)

    @property
    def has_seen_welcome(self) -> bool:
        return OnboardingStep.WELCOME in self.completed

    @property
    def has_created_account(self) -> bool:
        return OnboardingStep.CREATE_ACCOUNT in self.completed

    @property
    def has_created_circle(self) -> bool:
        return OnboardingStep.CREATE_CIRCLE in self.completed

    @property
    def has_added_roster(self) -> bool:
        return OnboardingStep.ADD_ROSTER in self.completed

    @property
    def has_invited_friends(self) -> bool:
        return OnboardingStep.INVITE_FRIENDS in self.completed

    @property
    def has_seen_coach_marks(self) -> bool:
        return OnboardingStep.COACH_MARKS in self.completed

    @property
    def is_complete(self) -> bool:
        return all(step in self.completed for step in STEP_ORDER)

    @property
    def next_step(self) -> OnboardingStep | None:
        """First step not yet done, or None when onboarding is complete."""
        for step in STEP_ORDER:
            if step not in self.completed:
                return step
        return None

    def to_dict(self) -> dict:
        """Serialize for display (CLI, debug screens)."""
        next_step = self.next_step
        return {
            "has_seen_welcome": self.has_seen_welcome,
            "has_created_account": self.has_created_account,
            "has_created_circle": self.has_created_circle,
            "has_added_roster": self.has_added_roster,
            "has_invited_friends": self.has_invited_friends,
            "has_seen_coach_marks": self.has_seen_coach_marks,
            "is_complete": self.is_complete,
            "next_step": next_step.value if next_step else None,
        }
