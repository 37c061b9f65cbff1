"""Adapters to the outside world: git, gh, the SSH config and the preference file."""
