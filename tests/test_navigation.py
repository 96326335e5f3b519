"""
Tests for the navigation gate.
"""

from rostr.navigation import (
    FRIEND_INVITE_ROUTE,
    MAIN_APP_ROUTE,
    ONBOARDING_WELCOME_ROUTE,
    NavigationState,
    Redirect,
    decide_route,
)
from rostr.referral import ReferralData


class TestDecideRoute:
    """Test redirect decisions."""

    def test_waits_while_auth_loading(self):
        state = NavigationState(is_authenticated=False, is_auth_loading=True, current_route_group="(tabs)")
        assert decide_route(state) is None

    def test_signed_out_outside_auth_goes_to_welcome(self):
        state = NavigationState(is_authenticated=False, is_auth_loading=False, current_route_group="(tabs)")
        assert decide_route(state) == Redirect(ONBOARDING_WELCOME_ROUTE)

    def test_referral_does_not_bypass_welcome(self):
        state = NavigationState(
            is_authenticated=False,
            is_auth_loading=False,
            current_route_group="(tabs)",
            has_referral_data=True,
            referral=ReferralData(ref="u1"),
        )
        assert decide_route(state) == Redirect(ONBOARDING_WELCOME_ROUTE)

    def test_signed_out_in_auth_stays(self):
        state = NavigationState(is_authenticated=False, is_auth_loading=False, current_route_group="(auth)")
        assert decide_route(state) is None

    def test_signed_in_with_referral_goes_to_friend_invite(self):
        state = NavigationState(
            is_authenticated=True,
            is_auth_loading=False,
            current_route_group="(auth)",
            current_screen="verify-otp",
            has_referral_data=True,
            referral=ReferralData(ref="u1", phone="555", invited_by="Sam"),
        )
        assert decide_route(state) == Redirect(
            FRIEND_INVITE_ROUTE,
            {"ref": "u1", "phone": "555", "invited_by": "Sam"},
        )

    def test_friend_invite_params_omit_missing_values(self):
        state = NavigationState(
            is_authenticated=True,
            is_auth_loading=False,
            current_route_group="(auth)",
            has_referral_data=True,
            referral=ReferralData(ref="u1"),
        )
        assert decide_route(state).params == {"ref": "u1"}

    def test_already_on_friend_invite_stays(self):
        state = NavigationState(
            is_authenticated=True,
            is_auth_loading=False,
            current_route_group="(auth)",
            current_screen="friend-invite",
            has_referral_data=True,
            referral=ReferralData(ref="u1"),
        )
        assert decide_route(state) is None

    def test_signed_in_without_referral_goes_to_app(self):
        state = NavigationState(is_authenticated=True, is_auth_loading=False, current_route_group="(auth)")
        assert decide_route(state) == Redirect(MAIN_APP_ROUTE)

    def test_signed_in_in_app_stays(self):
        state = NavigationState(
            is_authenticated=True,
            is_auth_loading=False,
            current_route_group="(tabs)",
            has_referral_data=True,
            referral=ReferralData(ref="u1"),
        )
        assert decide_route(state) is None

    def test_redirect_params_are_per_instance(self):
        first = Redirect(MAIN_APP_ROUTE)
        second = Redirect(MAIN_APP_ROUTE)
        first.params["ref"] = "u1"
        assert second.params == {}
        assert first != second
