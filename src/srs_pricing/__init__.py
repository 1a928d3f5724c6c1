"""SRS contract pricing engine — installed-base cost-plus pricing for multi-year contracts."""

__version__ = "3.0.0"
