"""
Call log with transcription/summary fields.
"""
