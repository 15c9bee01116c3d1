"""Tier build orchestration."""

from .builder import BuildResult, TierBuilder, build_all_tiers, build_tier

__all__ = ["BuildResult", "TierBuilder", "build_all_tiers", "build_tier"]
