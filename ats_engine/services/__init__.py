from .ats_service import calculate_ats_score, career_alignment_for, has_title_mismatch, most_recent_position

__all__ = ["calculate_ats_score", "career_alignment_for", "has_title_mismatch", "most_recent_position"]
