"""
richtext-guard - safe rendering of untrusted Portable Text.

Pipeline: raw blocks -> sanitizer -> structural validator -> renderer,
with plain text extraction and external link checks alongside.
"""

__version__ = "0.1.0"
