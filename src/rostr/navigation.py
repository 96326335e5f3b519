"""
Navigation Gate.

Pure decision function: given auth state, where the user currently is and
whether a referral is pending, return the redirect to issue (or None).
Re-evaluated whenever any of its inputs change; the router performs the
actual transition.
"""

from dataclasses import dataclass, field

from .referral import ReferralData

AUTH_GROUP = "(auth)"
TABS_GROUP = "(tabs)"

ONBOARDING_WELCOME_ROUTE = "/(auth)/onboarding-welcome"
FRIEND_INVITE_SCREEN = "friend-invite"
FRIEND_INVITE_ROUTE = "/(auth)/friend-invite"
MAIN_APP_ROUTE = "/(tabs)"


@dataclass
class Redirect:
    """A route change request for the router."""
    route: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NavigationState:
    """Inputs to the gate."""
    is_authenticated: bool
    is_auth_loading: bool
    current_route_group: str | None
    current_screen: str | None = None
    has_referral_data: bool = False
    referral: ReferralData | None = None


def _referral_params(referral: ReferralData | None) -> dict[str, str]:
    if referral is None:
        return {}
    params = {"ref": referral.ref, "phone": referral.phone, "invited_by": referral.invited_by}
    return {key: value for key, value in params.items() if value}


def decide_route(state: NavigationState) -> Redirect | None:
    """Return the redirect the current state calls for, or None to stay put."""
    if state.is_auth_loading:
        return None

    in_auth_group = state.current_route_group == AUTH_GROUP

    if not state.is_authenticated:
        if not in_auth_group:
            # Referred and unreferred users land on the same welcome screen
            return Redirect(ONBOARDING_WELCOME_ROUTE)
        return None

    if in_auth_group and state.current_screen != FRIEND_INVITE_SCREEN:
        if state.has_referral_data:
            return Redirect(FRIEND_INVITE_ROUTE, _referral_params(state.referral))
        return Redirect(MAIN_APP_ROUTE)

    return None
