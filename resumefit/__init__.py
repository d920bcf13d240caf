"""Resume parsing, job matching and tailored-draft quality checks."""

__version__ = "0.1.0"
