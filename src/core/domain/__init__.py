"""Domain models and entities.

Why:
- Pure data shapes (Pydantic v2) and identifier helpers live here.
- The domain knows nothing about HTTP, the CLI or the chat SDK.
"""
