"""Transfer UMIs from a separate index-read FASTQ file into paired read headers."""

from umitransfer.version import __version__

__all__ = ["__version__"]
