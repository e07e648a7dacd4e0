"""Cryptanalysis of the supported ciphers."""
