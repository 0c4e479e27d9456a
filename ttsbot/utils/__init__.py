"""Utility modules for the TTS bot."""
