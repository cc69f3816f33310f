"""Template sentences for feed items that carry no usable text of their own."""

import random
from typing import Optional

from ..core.text_utils import format_url

ORIGINAL_TEMPLATES = (
    "Reports from {domain} indicate significant concerns about government transparency.",
    "{domain} published documents revealing detailed statistics on civilian casualties.",
    "Internal memo obtained by {domain} shows critical failures in the oversight process.",
    "Classified information released by {domain} exposes specific details about military operations.",
    "{domain} investigation uncovered evidence of systematic violations in multiple departments.",
    "Leaked documents on {domain} reveal exact figures related to the environmental impact.",
    "{domain} reports that officials acknowledged serious mistakes in handling the crisis.",
    "Whistleblower testimony published on {domain} details explicit timeline of events.",
    "{domain} obtained documents showing precise numbers of affected individuals.",
    "Investigation by {domain} reveals concrete evidence of policy failures.",
)

REDACTED_TEMPLATES = (
    "{domain} discusses ongoing government communication efforts.",
    "Information published on {domain} mentions administrative procedures being followed.",
    "{domain} reports that the situation is being monitored by appropriate authorities.",
    "Statement released through {domain} indicates that operations are proceeding as authorized.",
    "{domain} indicates that standard protocols are being implemented.",
    "{domain} reports that environmental conditions are being assessed.",
    "Officials quoted by {domain} state that the matter is under review.",
    "{domain} reports that the timeline of events is being evaluated.",
    "{domain} mentions that the number of cases is being tracked.",
    "{domain} indicates that policies are being examined for potential improvements.",
)


def _pick(templates, url: str, rng: Optional[random.Random]) -> str:
    chooser = rng or random
    return chooser.choice(templates).format(domain=format_url(url or "") or "An unnamed source")


def original_text_for(url: str, rng: Optional[random.Random] = None) -> str:
    """A plausible "original" sentence attributed to the domain of *url*."""
    return _pick(ORIGINAL_TEMPLATES, url, rng)


def redacted_text_for(url: str, rng: Optional[random.Random] = None) -> str:
    """A sanitized counterpart sentence attributed to the domain of *url*."""
    return _pick(REDACTED_TEMPLATES, url, rng)
