"""
Customer records.
"""
