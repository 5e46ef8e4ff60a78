"""Readiness and change-notification layer.

The engine records the outcome of the first fetch here and fans out
custom-configuration changes to registered observers.
"""
