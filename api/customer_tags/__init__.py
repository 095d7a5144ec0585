"""
Customer <-> tag links.
"""
