"""
Outbound/inbound customer messages.
"""
