"""
Voice check-in backend: webhook ingestion, Langflow relay and caregiver notifications.
"""
__version__ = "0.1.0"
