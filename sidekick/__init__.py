"""Sidekick Service: library-aware chat assistant backend.

This package serves the Sidekick chat assistant of the community library:
- Keyword extraction from the latest user message
- Retrieval and ranking of stories, prompts and tools
- Context assembly and chat completion through the AI gateway
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
