"""Makeup removal backend."""
