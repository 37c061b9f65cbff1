"""Domain models and errors.

Why:
- Pure, strict data structures (Pydantic v2) and the error hierarchy live here.
- The domain knows nothing about subprocesses, the CLI or the SSH config file.
"""
