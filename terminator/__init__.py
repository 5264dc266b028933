"""Terminator chat core.

Model discovery and chat completion across OpenAI, Anthropic, Gemini
and OpenRouter behind one uniform interface.
"""

__version__ = "0.1.0"
