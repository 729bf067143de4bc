"""TalentFit: competency-based job-fit and team-fit assessment scoring."""

__version__ = "0.1.0"
