"""Rewrite providers for the remote text-completion endpoint."""
