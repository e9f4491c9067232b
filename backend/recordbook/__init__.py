"""Record Book — address-book style record management API and client."""

__version__ = "1.0.0"
