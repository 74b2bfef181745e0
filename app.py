"""
app.py
------
Flask entry point for the AI recruiting demo page.

Routes
------
GET  /                → Demo page; a fresh load starts a new conversation
POST /chat            → Ask the on-page assistant, re-render the page
POST /shortlist       → Rank the demo roster against typed requirements
GET  /api/candidates  → JSON demo roster
POST /api/chat        → Same assistant, JSON in / JSON out
POST /api/shortlist   → Same ranking, JSON in / JSON out
GET  /health          → Simple health-check endpoint

Conversation logs are held in process memory, keyed by a visitor id kept in
the session cookie. The cookie never carries the log itself.
"""

import os
import time
import logging
from datetime import datetime
from typing import Dict
from uuid import uuid4

from flask import Flask, request, render_template, jsonify, session, abort
from werkzeug.exceptions import HTTPException

from chatbot_engine   import new_conversation, send_message
from shortlist_engine import tokenise_requirements, rank_candidates, get_roster
from outreach         import build_mailto, is_from_owow

# --------------------------------------------------------------------------- #
#  App configuration                                                           #
# --------------------------------------------------------------------------- #

logging.basicConfig(
    level  = logging.INFO,
    format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET", "dev-secret-change-in-prod")

# Request body limit
MAX_CONTENT_LENGTH = 64 * 1024   # 64 KB
app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH

# Idle conversations are dropped after this many seconds
CONVERSATION_TTL_SECONDS = int(os.environ.get("CONVERSATION_TTL_SECONDS", "3600"))

# visitor id -> {"history": [...], "updated_at": float}
CONVERSATIONS: Dict[str, Dict[str, object]] = {}

# --------------------------------------------------------------------------- #
#  Page content                                                                #
# --------------------------------------------------------------------------- #

HIGHLIGHTS = [
    "+60% faster shortlist",
    "↓ time-to-hire",
    "Global-ready",
    "Privacy-minded",
]

PIPELINE = [
    {"step": "Source",    "desc": "Search public profiles, repos & job boards; build skills embeddings."},
    {"step": "Screen",    "desc": "Asynchronous code screens + LLM-assisted signal extraction."},
    {"step": "Interview", "desc": "Structured rubrics and live/async interview flows."},
    {"step": "Offer",     "desc": "Geo-aware comp bands & automated offer generation."},
    {"step": "Payroll",   "desc": "Global onboarding, invoices, and payouts."},
]

PROJECTS = [
    "Talent Ranker — parsed 50k+ profiles; skills embeddings & ranker.",
    "Interview Engine — LLM question generation, async code screens.",
    "Global Payroll — contract templates, automated payouts & receipts.",
]


# --------------------------------------------------------------------------- #
#  Conversation store                                                          #
# --------------------------------------------------------------------------- #

def _purge_stale_conversations() -> None:
    if not CONVERSATIONS:
        return
    now = time.time()
    stale_ids = [
        key
        for key, entry in list(CONVERSATIONS.items())
        if now - float(entry.get("updated_at", now)) > CONVERSATION_TTL_SECONDS
    ]
    for key in stale_ids:
        CONVERSATIONS.pop(key, None)
    if stale_ids:
        logger.info("Purged %d idle conversations", len(stale_ids))


def _visitor_id() -> str:
    """Return this visitor's id, assigning one on first contact."""
    visitor_id = session.get("visitor_id")
    if not isinstance(visitor_id, str) or not visitor_id:
        visitor_id = uuid4().hex
        session["visitor_id"] = visitor_id
    return visitor_id


def _start_conversation() -> list:
    """Replace this visitor's log with a fresh one."""
    _purge_stale_conversations()
    history = new_conversation()
    CONVERSATIONS[_visitor_id()] = {"history": history, "updated_at": time.time()}
    return history


def _get_history() -> list:
    """Return this visitor's conversation log, starting one if missing."""
    entry = CONVERSATIONS.get(_visitor_id())
    if entry is None:
        return _start_conversation()
    entry["updated_at"] = time.time()
    return entry["history"]


# --------------------------------------------------------------------------- #
#  Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _render_page(shortlist=None, requirements: str = ""):
    return render_template(
        "index.html",
        history      = _get_history(),
        shortlist    = shortlist,
        requirements = requirements,
        personalised = bool(session.get("personalised")),
        mailto       = build_mailto(),
        highlights   = HIGHLIGHTS,
        pipeline     = PIPELINE,
        projects     = PROJECTS,
        year         = datetime.now().year,
    )


def _json_text_field(name: str):
    """
    Read a string field from the JSON body.
    Returns (value, error_response_or_None). A missing field reads as "".
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return None, (jsonify({"error": "Request body must be a JSON object."}), 400)

    value = payload.get(name, "")
    if value is None:
        value = ""
    if not isinstance(value, str):
        return None, (jsonify({"error": f"'{name}' must be a string."}), 400)
    return value, None


@app.before_request
def _reject_oversized_body():
    length = request.content_length
    if length is not None and length > app.config["MAX_CONTENT_LENGTH"]:
        abort(413)


# --------------------------------------------------------------------------- #
#  Routes – Web UI                                                             #
# --------------------------------------------------------------------------- #

@app.route("/", methods=["GET"])
def index():
    """Render the demo page. A full load clears the conversation."""
    _start_conversation()
    session["personalised"] = is_from_owow(request.referrer, request.args.get("from"))
    return _render_page()


@app.route("/chat", methods=["POST"])
def chat():
    """Handle the assistant form. Blank messages leave the log alone."""
    history = _get_history()

    reply = send_message(history, request.form.get("message", ""))
    if reply is not None:
        logger.info("chat: %d messages in log", len(history))

    return _render_page()


@app.route("/shortlist", methods=["POST"])
def shortlist():
    """Rank the demo roster and render it under the requirements box."""
    requirements = request.form.get("requirements", "")
    ranked = rank_candidates(requirements)
    logger.info(
        "shortlist: %d tokens, top=%s (%d)",
        len(tokenise_requirements(requirements)),
        ranked[0]["name"] if ranked else None,
        ranked[0]["score"] if ranked else 0,
    )
    return _render_page(shortlist=ranked, requirements=requirements)


# --------------------------------------------------------------------------- #
#  Routes – JSON API                                                           #
# --------------------------------------------------------------------------- #

@app.route("/api/candidates", methods=["GET"])
def api_candidates():
    """Return the demo roster."""
    return jsonify({"candidates": get_roster()})


@app.route("/api/chat", methods=["POST"])
def api_chat():
    """
    JSON endpoint for the assistant.

    Body:
        message – string

    Returns {"reply": str|null, "history": [...]}; reply is null when the
    message was blank and nothing was logged.
    """
    message, error = _json_text_field("message")
    if error:
        return error

    history = _get_history()
    reply   = send_message(history, message)

    return jsonify({"reply": reply, "history": history})


@app.route("/api/shortlist", methods=["POST"])
def api_shortlist():
    """
    JSON endpoint for the ranker.

    Body:
        requirements – string, e.g. "React, SQL"
    """
    requirements, error = _json_text_field("requirements")
    if error:
        return error

    return jsonify({
        "tokens":     tokenise_requirements(requirements),
        "candidates": rank_candidates(requirements),
    })


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "service": "ai-recruiting-demo"})


# --------------------------------------------------------------------------- #
#  Error handlers                                                              #
# --------------------------------------------------------------------------- #

@app.errorhandler(413)
def too_large(e):
    return jsonify({"error": "Request is too large. Maximum allowed size is 64 KB."}), 413


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Endpoint not found."}), 404


@app.errorhandler(500)
def server_error(e):
    logger.error("Internal server error: %s", e)
    return jsonify({"error": "Internal server error."}), 500


@app.errorhandler(HTTPException)
def http_error(e):
    return jsonify({"error": e.description}), e.code


# --------------------------------------------------------------------------- #
#  Entry point                                                                 #
# --------------------------------------------------------------------------- #

if __name__ == "__main__":
    port  = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    app.run(host="0.0.0.0", port=port, debug=debug)
