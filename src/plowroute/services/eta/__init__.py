"""ETA projection services."""

from .projector import EtaEstimate, count_jobs_ahead, preview_tier_etas, project_eta

__all__ = ["EtaEstimate", "project_eta", "count_jobs_ahead", "preview_tier_etas"]
