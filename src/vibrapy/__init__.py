"""Vibration feature extraction and machine health classification."""
