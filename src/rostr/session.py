"""
App Session.

Explicitly constructed service that owns the onboarding tracker, the
referral and pending-invite stores, and launch capture for one app
process. Tests build isolated sessions over a MemoryStore.
"""

import logging
from enum import Enum

from .capture import LaunchCapture
from .config import RostrSettings, get_settings
from .invites import PendingInvite, PendingInviteStore
from .navigation import NavigationState, Redirect, decide_route
from .onboarding import OnboardingTracker
from .referral import ReferralData, ReferralStore
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    """Auth state-change events from the backend auth client."""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class AppSession:
    """Onboarding, referral and invite state for one running app."""

    def __init__(self, store: KeyValueStore, settings: RostrSettings | None = None):
        settings = settings or get_settings()
        self.store = store
        self.tracker = OnboardingTracker(store)
        self.referrals = ReferralStore(store)
        self.invites = PendingInviteStore(store, ttl_ms=settings.invite_ttl_ms)
        self.capture = LaunchCapture(self.referrals, self.invites)
        self.is_authenticated = False
        self.is_auth_loading = True

    async def start(self, initial_url: str | None = None, clipboard_text: str | None = None) -> bool:
        """
        Load persisted referral data, then run the launch capture sources once.

        Returns True when the clipboard held an invite and should be cleared.
        """
        await self.referrals.load()

        if initial_url:
            await self.capture.handle_url(initial_url)

        clear_clipboard = False
        if clipboard_text:
            clear_clipboard = await self.capture.handle_clipboard(clipboard_text)

        return clear_clipboard

    async def handle_auth_event(self, event: AuthEvent | str) -> None:
        """Apply a SIGNED_IN / SIGNED_OUT event. Other events are ignored."""
        try:
            event = AuthEvent(event)
        except ValueError:
            logger.debug(f"Ignoring auth event {event!r}")
            return

        self.is_auth_loading = False
        if event is AuthEvent.SIGNED_IN:
            self.is_authenticated = True
            await self.tracker.mark_account_created()
        else:
            self.is_authenticated = False
        logger.info(f"Auth state changed: {event.value}")

    def set_auth_state(self, is_authenticated: bool, is_loading: bool = False) -> None:
        """Set auth state from a restored session (no event fired)."""
        self.is_authenticated = is_authenticated
        self.is_auth_loading = is_loading

    def navigation_state(self, route_group: str | None, screen: str | None = None) -> NavigationState:
        return NavigationState(
            is_authenticated=self.is_authenticated,
            is_auth_loading=self.is_auth_loading,
            current_route_group=route_group,
            current_screen=screen,
            has_referral_data=self.referrals.has_referral_data,
            referral=self.referrals.referral_data,
        )

    def next_redirect(self, route_group: str | None, screen: str | None = None) -> Redirect | None:
        return decide_route(self.navigation_state(route_group, screen))

    async def consume_referral(self) -> ReferralData | None:
        """
        Hand the referral to the friend-invite flow and clear it.

        Without the clear the post-sign-in redirect would repeat on every launch.
        """
        referral = self.referrals.referral_data
        if referral is not None:
            await self.referrals.clear_referral_data()
            if self.referrals.referral_data is not None:
                logger.warning(f"Referral {referral.ref} could not be cleared; not consuming it")
                return None
            logger.info(f"Consumed referral {referral.ref}")
        return referral

    async def consume_pending_invite(self) -> PendingInvite | None:
        """Hand the live pending invite to the join-circle flow and clear it."""
        invite = await self.invites.get_pending_invite()
        if invite is not None:
            await self.invites.clear_pending_invite()
            logger.info(f"Consumed pending invite for circle {invite.circle_id}")
        return invite
