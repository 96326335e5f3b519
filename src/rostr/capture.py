"""
Launch capture: deep links, App Store redirects and the clipboard.

Each source parses invite parameters and hands them to the referral and
pending-invite stores. Sources are independent; if several fire on the
same launch the last write wins.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import parse_qs, unquote, urlparse

from .invites import PendingInviteStore
from .referral import ReferralData, ReferralStore

logger = logging.getLogger(__name__)

APP_SCHEMES = ("rostrdating", "rostr")
WEB_HOSTS = ("rostrdating.com", "www.rostrdating.com")

CLIPBOARD_MARKERS = ("rostr://invite", "rostrdating://invite")
CLIPBOARD_CIRCLE = re.compile(r"circle=([^&\s]+)")
CLIPBOARD_INVITED_BY = re.compile(r"invited_by=([^&\s]+)")


@dataclass
class InviteParams:
    """Parameters carried by an invite, referral or profile link."""
    circle: str | None = None
    invited_by: str | None = None
    inviter: str | None = None
    ref: str | None = None
    phone: str | None = None
    username: str | None = None

    @property
    def inviter_name(self) -> str | None:
        return self.invited_by or self.inviter

    def is_empty(self) -> bool:
        return not any(
            (self.circle, self.invited_by, self.inviter, self.ref, self.phone, self.username)
        )


def _query_params(query: str) -> InviteParams:
    values = {key: items[0] for key, items in parse_qs(query).items() if items and items[0]}
    return InviteParams(
        circle=values.get("circle"),
        invited_by=values.get("invited_by"),
        inviter=values.get("inviter"),
        ref=values.get("ref"),
        phone=values.get("phone"),
        username=values.get("username"),
    )


def parse_deep_link(url: str) -> InviteParams | None:
    """
    Extract invite parameters from a launch URL.

    Handles:
    - rostrdating://invite?circle=<id>&invited_by=<name> (also rostr://)
    - rostrdating://profile/<username>
    - https://rostrdating.com/invite/<circle> and https://rostrdating.com/@<username>
    - any web URL carrying ref/phone/invited_by/circle/inviter query params
      (referral pages, App Store redirects)

    Returns None when the URL carries nothing of interest.
    """
    parsed = urlparse(url.strip())
    scheme = parsed.scheme.lower()

    if scheme in APP_SCHEMES:
        host = parsed.netloc.lower()
        if host == "invite":
            params = _query_params(parsed.query)
        elif host == "profile":
            params = InviteParams(username=parsed.path.strip("/") or None)
        else:
            return None
        return None if params.is_empty() else params

    if scheme not in ("http", "https"):
        return None

    params = _query_params(parsed.query)
    if parsed.netloc.lower() in WEB_HOSTS:
        parts = [part for part in parsed.path.split("/") if part]
        if len(parts) >= 2 and parts[0] == "invite":
            params.circle = parts[1]
        elif parts and parts[0].startswith("@") and len(parts[0]) > 1:
            params.username = parts[0][1:]

    return None if params.is_empty() else params


def parse_clipboard(text: str) -> InviteParams | None:
    """
    Find a copied circle invite link in clipboard text.

    Fallback for installs through the App Store, where the deep link itself
    never reaches the app.
    """
    if not text or not any(marker in text for marker in CLIPBOARD_MARKERS):
        return None

    circle = CLIPBOARD_CIRCLE.search(text)
    if not circle:
        return None

    invited_by = CLIPBOARD_INVITED_BY.search(text)
    return InviteParams(
        circle=unquote(circle.group(1)),
        invited_by=unquote(invited_by.group(1)) if invited_by else None,
    )


class LaunchCapture:
    """Routes captured link parameters into the referral and invite stores."""

    def __init__(self, referrals: ReferralStore, invites: PendingInviteStore):
        self.referrals = referrals
        self.invites = invites
        self._processed_urls: set[str] = set()

    async def handle_url(self, url: str) -> InviteParams | None:
        """
        Capture an incoming URL. Each URL is processed once per session.

        Circle params become a pending invite; a `ref` param becomes the
        referral record. Returns None when the URL carries neither.
        """
        if url in self._processed_urls:
            logger.debug(f"Ignoring already processed URL: {url}")
            return None
        self._processed_urls.add(url)

        try:
            params = parse_deep_link(url)
        except ValueError as e:
            logger.warning(f"Could not parse launch URL {url!r}: {e}")
            return None

        if params is None or not (params.circle or params.ref):
            logger.debug(f"No invite or referral in URL: {url}")
            return None

        logger.info(f"Processing deep link: {url}")

        if params.circle:
            await self.invites.store_pending_invite(params.circle, params.inviter_name)

        if params.ref:
            await self.referrals.set_referral_data(
                ReferralData(
                    ref=params.ref,
                    phone=params.phone,
                    invited_by=params.inviter_name,
                    circle=params.circle,
                    username=params.username,
                )
            )

        return params

    async def handle_clipboard(self, text: str | None) -> bool:
        """
        Capture a circle invite from clipboard text.

        Never overwrites an invite that is already pending. Returns True when
        an invite was stored and the caller should clear the clipboard.
        """
        params = parse_clipboard(text or "")
        if params is None:
            return False

        if await self.invites.has_pending_invite():
            logger.debug("Pending invite already present; ignoring clipboard")
            return False

        logger.info(f"Found circle invite in clipboard: {params.circle}")
        await self.invites.store_pending_invite(params.circle, params.invited_by)
        return True
