"""Utility modules for health-tracker."""
