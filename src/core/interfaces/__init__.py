"""Interfaces/abstractions of the Core.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the Core depends on abstractions, not on an SDK.
"""
