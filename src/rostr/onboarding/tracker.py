"""
Onboarding Progress Tracker.

Reads and writes the onboarding flags. Every operation degrades to
"nothing saved yet" on storage errors: a user may see onboarding again,
but is never locked out of the app by it.
"""

import logging

from rostr.errors import StorageError
from rostr.storage import KeyValueStore

from .steps import (
    LEGACY_COMPLETE_KEY,
    STEP_ORDER,
    OnboardingProgress,
    OnboardingStep,
)

logger = logging.getLogger(__name__)

TRUE = "true"


class OnboardingTracker:
    """Onboarding flags over a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get_progress(self) -> OnboardingProgress:
        """Read all flags in one batch. Unreadable flags count as not done."""
        keys = [step.storage_key for step in STEP_ORDER]
        try:
            values = dict(await self.store.multi_get(keys))
        except StorageError as e:
            logger.error(f"Error getting onboarding progress: {e}")
            return OnboardingProgress()

        completed = frozenset(
            step for step in STEP_ORDER if values.get(step.storage_key) == TRUE
        )
        return OnboardingProgress(completed=completed)

    async def mark_step(self, step: OnboardingStep) -> None:
        """Mark a step done. No-op if it already is; never raises."""
        try:
            if await self.store.get_item(step.storage_key) == TRUE:
                return
            await self.store.set_item(step.storage_key, TRUE)
        except StorageError as e:
            logger.error(f"Error marking {step.value} done: {e}")
            return
        logger.info(f"Onboarding step done: {step.value}")

    async def mark_welcome_seen(self) -> None:
        await self.mark_step(OnboardingStep.WELCOME)

    async def mark_account_created(self) -> None:
        await self.mark_step(OnboardingStep.CREATE_ACCOUNT)

    async def mark_circle_created(self) -> None:
        await self.mark_step(OnboardingStep.CREATE_CIRCLE)

    async def mark_roster_added(self) -> None:
        await self.mark_step(OnboardingStep.ADD_ROSTER)

    async def mark_friends_invited(self) -> None:
        await self.mark_step(OnboardingStep.INVITE_FRIENDS)

    async def mark_coach_marks_seen(self) -> None:
        await self.mark_step(OnboardingStep.COACH_MARKS)

    async def is_onboarding_complete(self) -> bool:
        return (await self.get_progress()).is_complete

    async def get_next_step(self) -> OnboardingStep | None:
        return (await self.get_progress()).next_step

    async def should_show_coach_marks(self) -> bool:
        """Coach marks are shown once everything else is done."""
        progress = await self.get_progress()
        return progress.next_step == OnboardingStep.COACH_MARKS

    async def reset_onboarding(self) -> None:
        """
        Clear every onboarding flag.

        QA/debug only; production UI must not expose it.
        """
        keys = [step.storage_key for step in STEP_ORDER] + [LEGACY_COMPLETE_KEY]
        try:
            await self.store.multi_remove(keys)
        except StorageError as e:
            logger.error(f"Error resetting onboarding: {e}")
            return
        logger.info("Onboarding reset")
