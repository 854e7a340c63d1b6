"""Application layer: commands, queries, handlers and application services.

Handlers depend on domain protocols only; infrastructure is injected by
``latchkey.core.container``.
"""
