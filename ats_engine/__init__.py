"""Resume ATS scoring, job keyword categorization and resume extraction."""

__version__ = "0.1.0"
