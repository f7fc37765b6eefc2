# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
DZ CCP
------

A Python library and command-line tool for Algérie Poste CCP (Compte Courant
Postal) account numbers.

Main capabilities:
- CCP key ("clé") computation,
- RIP (Relevé d'Identité Postal) derivation and RIP key extraction,
- RIP consistency checks,
- batch derivation over client CSV files,
- verification of the identifiers stored in client lists.

The derivation engine (``dz_ccp.ccp``) is pure and never raises for user
input: invalid account numbers are returned as ``InvalidCCP`` results.


Version: 0.1.0

Usage:
    python -m dz_ccp.cli --help
"""

__all__ = ["ccp", "accounts", "io", "views"]

__version__ = "0.1.0"
