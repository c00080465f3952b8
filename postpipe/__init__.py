"""
postpipe - markdown blog content pipeline

Build-time index generation and the runtime search/filter layer that
consumes the generated index.
"""

__version__ = "0.1.0"
