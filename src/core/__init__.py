"""
Core numeric primitives.

Pure, stateless building blocks independent of external systems
(payout workflows, persistence, API layers).
"""
