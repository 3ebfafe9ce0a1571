"""
M365 Admin Password Generator
=============================
Secure password and passphrase generation for tenant administrators:
temporary user passwords, service account secrets, and wordlist passphrases.

All randomness comes from the operating system CSPRNG (the `secrets` module).
Generated secrets are never logged, cached, or written to disk.
"""

__version__ = "1.0.0"
__author__ = "M365 Admin Tooling"
