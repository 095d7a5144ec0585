"""
Follow-up tasks per customer.
"""
