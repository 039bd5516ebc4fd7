"""Shared libraries for the order signer gateway."""
