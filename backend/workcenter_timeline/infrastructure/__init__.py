"""Adapters: event bus, repositories and order sources."""
