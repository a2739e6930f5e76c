"""Data loading module for profile exports."""

from .loaders import load_profiles, load_profile_frame, frame_to_records

__all__ = ["load_profiles", "load_profile_frame", "frame_to_records"]
