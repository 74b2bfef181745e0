"""
shortlist_engine.py
-------------------
Keyword-overlap shortlisting for the demo roster.

Responsibilities:
  1. Split a free-text requirements string into requirement tokens.
  2. Score each candidate by how many tokens occur inside its skills.
  3. Rank the roster by score, highest first.

Token and skill comparisons are lowercase. A token matches a skill when it
is a substring of it, so "node" matches "Node.js" (and "a" matches nearly
everything).
"""

import re
import copy
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MATCH_POINTS = 20
MAX_SCORE    = 100

_TOKEN_SPLIT = re.compile(r"[\s,]+")

# --------------------------------------------------------------------------- #
#  Demo roster                                                                 #
# --------------------------------------------------------------------------- #

CANDIDATES: tuple = (
    {"name": "Alice Johnson", "skills": ["React", "Node.js", "SQL"]},
    {"name": "Mark Patel",    "skills": ["Python", "Machine Learning", "Data Science"]},
    {"name": "Sara Wong",     "skills": ["Recruitment", "HR Tech", "Payroll"]},
    {"name": "David Kim",     "skills": ["TypeScript", "Next.js", "Postgres"]},
)


def get_roster() -> list:
    """Return a copy of the roster safe for callers to modify."""
    return copy.deepcopy(list(CANDIDATES))


# --------------------------------------------------------------------------- #
#  Tokenising                                                                  #
# --------------------------------------------------------------------------- #

def tokenise_requirements(requirements: str) -> list:
    """
    Lowercase *requirements* and split on whitespace and commas.

    Returns
    -------
    list[str] – non-empty tokens in input order, each listed once.
    """
    if not requirements:
        return []

    seen: set = set()
    tokens: list = []
    for token in _TOKEN_SPLIT.split(requirements.lower()):
        if token and token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens


# --------------------------------------------------------------------------- #
#  Scoring                                                                     #
# --------------------------------------------------------------------------- #

def _matched_terms(tokens: list, skills: list) -> list:
    lowered = [s.lower() for s in (skills or [])]
    return [t for t in tokens if any(t in skill for skill in lowered)]


def _score(matched: list) -> int:
    return min(len(matched) * MATCH_POINTS, MAX_SCORE)


def calculate_score(requirements: str, candidate: dict) -> int:
    """
    Score one candidate against *requirements*.

    Each distinct requirement token found inside at least one of the
    candidate's skills is worth MATCH_POINTS, however many skills it hits.
    The total is capped at MAX_SCORE.
    """
    tokens  = tokenise_requirements(requirements)
    matched = _matched_terms(tokens, candidate.get("skills"))
    return _score(matched)


# --------------------------------------------------------------------------- #
#  Public API – ranking                                                        #
# --------------------------------------------------------------------------- #

def rank_candidates(requirements: str, roster: Optional[list] = None) -> list:
    """
    Rank *roster* (default: CANDIDATES) against *requirements*.

    Parameters
    ----------
    requirements : str        – free text, e.g. "React, SQL, Node.js"
    roster       : list|None  – candidate dicts with "name" and "skills"

    Returns
    -------
    list of new dicts (sorted by score, descending; ties keep roster order):
        name          (str)
        skills        (list[str])
        score         (int 0-100)
        matched_terms (list[str])  – requirement tokens that hit a skill

    The roster and its dicts are never modified.
    """
    if roster is None:
        roster = CANDIDATES

    tokens  = tokenise_requirements(requirements)
    results = []

    for candidate in roster:
        skills  = list(candidate.get("skills") or [])
        matched = _matched_terms(tokens, skills)
        score   = _score(matched)
        logger.debug("rank_candidates: %s scored %d (%s)", candidate.get("name"), score, matched)

        results.append({
            "name":          candidate.get("name", ""),
            "skills":        skills,
            "score":         score,
            "matched_terms": matched,
        })

    # sorted() is stable, so equal scores keep their roster order
    return sorted(results, key=lambda c: c["score"], reverse=True)
