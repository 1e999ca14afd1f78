"""Jurnal Guru account package.

This package is organized by feature modules (accounts, auth_codes, identity, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
