"""Core: domain, contracts, settings and the provisioning workflow."""
