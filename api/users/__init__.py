"""
CRM users (agents and admins).
"""
