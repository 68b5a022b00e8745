"""Multi-provider AI analysis of extracted content.

Sends a page's title and text to every configured text-analysis provider
concurrently and collects one outcome per provider: keywords plus a summary,
or an error.

Sub-modules:
- ``config``            — provider table, endpoints, prompts and limits
- ``outcomes``          — :class:`AnalysisSuccess` / :class:`AnalysisFailure`
- ``_chat_completion``  — OpenAI-compatible chat-completion client
- ``_generative``       — Gemini-style ``generateContent`` client
- ``_parsing``          — normalization of provider text into an outcome
- ``providers``         — the per-provider adapter (never raises)
- ``orchestrator``      — concurrent fan-out with per-provider timeout
"""

from __future__ import annotations
