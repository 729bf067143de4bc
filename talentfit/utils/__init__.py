"""Shared utilities for TalentFit."""
