"""Melee combat resolution and the cosmetic effects it requests."""
