"""Cipher services."""
