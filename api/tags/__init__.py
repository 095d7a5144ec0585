"""
Customer tags.
"""
