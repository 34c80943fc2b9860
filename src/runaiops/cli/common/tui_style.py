"""Questionary / prompt_toolkit theme for RUNAI-OPS.

Questionary uses prompt_toolkit under the hood. This module defines the
styles shared by all interactive prompts (job picker, confirmations).
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold ansicyan",
        "answer": "bold ansigreen",
        "pointer": "bold ansigreen",
        "highlighted": "bold ansigreen",
        "selected": "bold ansigreen",
        "instruction": "ansibrightblack",
        "disabled": "ansibrightblack",
    }
)

# Confirmations precede deletions, so they are rendered in red.
QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansired",
        "question": "bold ansired",
        "answer": "bold ansired",
        "instruction": "ansibrightblack",
    }
)
