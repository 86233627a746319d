"""This is the processing submodule.

This module contains the vibration pipeline: the rate limited sample buffer, the
feature extractor, the health scorer, the baseline comparator and the alert
classifier, along with the threshold table they share. It also holds the synthetic
sensor source and the fleet trend helpers.
"""
