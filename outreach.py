"""
outreach.py
-----------
Contact link and visitor personalisation for the demo page.

  build_mailto(recipient=None)          -> str
  is_from_owow(referrer, from_param)    -> bool
"""

import os
import re
import logging
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_EMAIL = "your.email@example.com"

MAIL_SUBJECT = "Interview request – AI Recruiting Platform Builder"
MAIL_BODY = (
    "Hi Owow Talents,\n\n"
    "I saw your company and would like to schedule an interview about "
    "building your AI recruiting platform.\n\n"
    "— Nammy"
)

# Characters a browser's encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"

_OWOW_REFERRER = re.compile(r"linkedin\.com/company/owow-talents", re.IGNORECASE)
_OWOW_PARAM    = re.compile(r"owow", re.IGNORECASE)


def build_mailto(recipient: Optional[str] = None) -> str:
    """
    Build the "Schedule Interview" link.

    *recipient* falls back to the CONTACT_EMAIL environment variable, then
    to DEFAULT_CONTACT_EMAIL.
    """
    recipient = recipient or os.environ.get("CONTACT_EMAIL") or DEFAULT_CONTACT_EMAIL
    subject   = quote(MAIL_SUBJECT, safe=_URI_COMPONENT_SAFE)
    body      = quote(MAIL_BODY,    safe=_URI_COMPONENT_SAFE)
    return f"mailto:{recipient}?subject={subject}&body={body}"


def is_from_owow(referrer: Optional[str], from_param: Optional[str]) -> bool:
    """
    True when the visitor came from the Owow Talents LinkedIn page or the
    link carries ``?from=owow...``. Missing values count as empty.
    """
    personalised = bool(
        _OWOW_REFERRER.search(referrer or "") or _OWOW_PARAM.search(from_param or "")
    )
    if personalised:
        logger.info("is_from_owow: personalised visit (referrer=%s)", referrer or "(none)")
    return personalised
