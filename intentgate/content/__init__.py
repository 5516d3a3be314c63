"""
Content - Static text for agents and the CLI

Text is data, not code embedded in methods.
"""

from .prompts import INTENT_SYSTEM_PROMPT, render_intent_context, build_system_prompt

__all__ = ['INTENT_SYSTEM_PROMPT', 'render_intent_context', 'build_system_prompt']
