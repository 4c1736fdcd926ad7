"""
Data helper tests for loglinear-cost.

Tests for matrix loading and synthetic problem generation.
"""
