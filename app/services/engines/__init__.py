"""Cipher engines and their registry."""
