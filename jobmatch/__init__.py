"""
jobmatch - job posting deduplication and job/profile matching.

Content hashing and fuzzy duplicate detection for postings ingested from
multiple sources, plus a weighted scoring engine that ranks jobs for a
profile and profiles for a job.
"""

__version__ = "0.1.0"
