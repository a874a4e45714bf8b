"""rbexport - bulk export of Rebrandly links to CSV."""

__version__ = "0.1.0"
