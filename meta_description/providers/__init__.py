"""
Provider layer for the AI summary vendors.

Each vendor implements the abstract interface in ``llm/interface.py``; the
shared request flow and the HTTP gateway are reused by all of them.

Directory Structure:
    providers/
    ├── __init__.py            # This file
    ├── gateway.py             # Stateless aiohttp gateway (one call, one session)
    └── llm/
        ├── __init__.py        # Static registration - build_registry()
        ├── interface.py       # Abstract interface all providers implement
        ├── orchestration.py   # Shared key check / call / parse flow
        ├── registry.py        # Name -> provider mapping
        ├── gemini_impl.py     # Gemini implementation
        ├── mistral_impl.py    # Mistral implementation
        ├── openai_impl.py     # OpenAI implementation
        ├── anthropic_impl.py  # Anthropic implementation
        └── cohere_impl.py     # Cohere implementation
"""

__all__ = []
