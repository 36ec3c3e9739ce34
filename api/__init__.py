"""
FastAPI RESTful API for the Bookshelf service.

This module exposes the book handlers over HTTP:
- Book creation, listing, lookup, update and deletion
- Uniform success/fail response envelopes
- Health check
"""
