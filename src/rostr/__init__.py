"""
Rostr - Onboarding and invite core for the RostrDating client.

Tracks onboarding milestones, captures referral and circle-invite links,
and decides where a freshly launched app should navigate.
"""

__version__ = "0.1.0"
