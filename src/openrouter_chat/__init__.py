"""Single-shot terminal chat client for the OpenRouter chat-completions API."""

__version__ = "0.1.0"
