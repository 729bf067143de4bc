"""Application configuration for TalentFit."""

from talentfit.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
