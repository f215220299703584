"""Protocol plugins: each module exposes `CONFIGS` and `register(registry)`."""
