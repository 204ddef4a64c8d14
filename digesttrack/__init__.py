"""Meal and symptom tracking with food tag correlation analysis."""
