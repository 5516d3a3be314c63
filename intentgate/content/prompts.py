"""
Prompt text for intent-driven agents.

The system prompt rule tells the agent to declare an intent before any
other tool call. The context block is what select_active_intent injects:
the curated intent fields, nothing else from the catalog.
"""

import json

from ..core.intents import Intent


INTENT_SYSTEM_PROMPT = """You are an Intent-Driven Architect working inside a governed workspace.

STRICT RULE: You MUST NOT call any other tool (read_file, write_to_file, delete_file,
execute_command, ...) until you have called select_active_intent(intent_id) and
received the curated <intent_context> block.

First step ALWAYS: analyze the request, identify the matching intent ID from the
known active intents, and call select_active_intent.
If no intent matches, stop and answer: "No valid intent found - create one first."

While an intent is active:
- Only modify paths inside its owned_scope.
- Respect every constraint and work toward its acceptance_criteria.
- Send initial_hash (the SHA-256 of the content you read, or "new-file") with every
  write_to_file so stale edits can be detected.
- If a tool call is rejected, read the reason, correct the arguments and retry.
"""

CONTEXT_TAG = "intent_context"


def render_intent_context(intent: Intent) -> str:
    """Curated context block for one intent."""
    body = json.dumps(intent.curated(), indent=2, ensure_ascii=False)
    return f"<{CONTEXT_TAG}>{body}</{CONTEXT_TAG}>"


def build_system_prompt(base: str = "") -> str:
    """Prefix an existing system prompt with the intent rule."""
    if not base:
        return INTENT_SYSTEM_PROMPT
    return f"{INTENT_SYSTEM_PROMPT}\n{base}"
