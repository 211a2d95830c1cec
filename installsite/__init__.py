"""
installsite — install-script delivery for the JOEL documentation site.
"""

__version__ = "0.1.0"
