"""
FixWatch - anonymous problem reporting with crowd-validated fixes.

A reporter flags a problem and keeps a private secret. Once the problem is
marked resolved, the reporter opens the fix for public judgment. Voters
confirm or challenge it, and a confirmed fix earns the reporter a golden
key that can later sponsor or veto any report.

Guiding rules:
- Possession of a secret is the only credential
- Secrets are never stored, only their fingerprints
- Every golden-key action is audited
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
