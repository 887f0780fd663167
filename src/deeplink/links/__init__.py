"""Inbound link parsing — URI forms, canonical paths, and query decoding."""
