"""
Liveness/readiness endpoints.
"""
