"""
chatbot_engine.py  –  On-page assistant
=======================================
Answers visitor questions on the demo page with canned replies.

Matching pipeline:
  1. Walk REPLY_RULES in their configured order
  2. First rule whose pattern is found anywhere in the text wins
  3. DEFAULT_RESPONSE when nothing matches

Order matters: "can you recruit with this tech" hits the Owow rule, not the
stack rule, because it is listed first.

Conversation log format — each entry:
{
    "role": "assistant" | "user",
    "text": <string>
}
"""

import re
import logging
from typing import Optional

logger = logging.getLogger(__name__)

ROLE_ASSISTANT = "assistant"
ROLE_USER      = "user"

# ═══════════════════════════════════════════════════════════════════════════
#  REPLY RULES
# ═══════════════════════════════════════════════════════════════════════════
REPLY_RULES = (

    # ── Capabilities ─────────────────────────────────────────────────────────
    {
        "name": "capabilities",
        "pattern": re.compile(r"what can you build|what do you build|what can you do", re.IGNORECASE),
        "response": (
            "I build data-heavy, AI-enabled hiring products: sourcing engines, "
            "rankers, interview tooling, payroll flows, and analytics."
        ),
    },

    # ── Owow Talents ─────────────────────────────────────────────────────────
    {
        "name": "owow",
        "pattern": re.compile(r"owow|talents|recruit|hire|payroll", re.IGNORECASE),
        "response": (
            "For Owow Talents: I can ship a sourcing→payroll MVP in weeks—"
            "candidate parsers, embeddings, shortlisting, scorecards, and payout automations."
        ),
    },

    # ── Tech stack ───────────────────────────────────────────────────────────
    {
        "name": "stack",
        "pattern": re.compile(r"stack|tech", re.IGNORECASE),
        "response": (
            "Typical stack: Next.js + Tailwind, Node/Python backend, Postgres, Redis, "
            "Docker. Optionally LLM integrations for ranking and screening."
        ),
    },

    # ── Contact / scheduling ─────────────────────────────────────────────────
    {
        "name": "contact",
        "pattern": re.compile(r"contact|interview|schedule|calendar", re.IGNORECASE),
        "response": (
            "Click 'Schedule Interview' to email me (or replace mailto in the "
            "code with your calendly)."
        ),
    },
)

# Fallback response
DEFAULT_RESPONSE = (
    "Nice question — I’d ship a shortlist ranker, structured interview rubrics, "
    "and an offer workflow. Ask about architecture or timeline."
)

GREETING = (
    "Hey! I’m your on-page AI. Ask me how I’ll help Owow Talents hire faster."
)


def get_bot_response(user_message: str) -> str:
    """
    Return the reply of the first rule whose pattern occurs in *user_message*,
    or DEFAULT_RESPONSE. Never raises; every string has exactly one answer.
    """
    text = user_message or ""

    for rule in REPLY_RULES:
        if rule["pattern"].search(text):
            logger.debug("get_bot_response: matched rule '%s'", rule["name"])
            return rule["response"]

    logger.debug("get_bot_response: no rule matched, using default")
    return DEFAULT_RESPONSE


# --------------------------------------------------------------------------- #
#  Conversation log                                                            #
# --------------------------------------------------------------------------- #

def new_conversation() -> list:
    """A fresh log, opened by the assistant's greeting."""
    return [{"role": ROLE_ASSISTANT, "text": GREETING}]


def send_message(history: list, user_message: str) -> Optional[str]:
    """
    Append the visitor's message and the assistant's reply to *history*.

    Empty or whitespace-only input is ignored: *history* is left untouched
    and None is returned. Otherwise exactly two entries are appended, user
    first, and the reply text is returned.
    """
    if not user_message or not user_message.strip():
        return None

    reply = get_bot_response(user_message)
    history.append({"role": ROLE_USER,      "text": user_message.strip()})
    history.append({"role": ROLE_ASSISTANT, "text": reply})
    return reply
