"""assetprep: build-time copy, minify and merge of static web assets."""

__version__ = "1.0.0"
