"""Console task list backed by a remote REST task API."""

__version__ = "0.1.0"
