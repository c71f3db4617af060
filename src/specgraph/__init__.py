"""specgraph: dependency, coverage, and health analysis for spec corpora."""

__version__ = "0.1.0"
