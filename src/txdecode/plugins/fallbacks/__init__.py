"""Fallback plugins: each module exposes `register(registry)`."""
