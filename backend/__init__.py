"""
PR Review Dashboard - HTTP backend.

Provides a FastAPI backend for GitHub sign-in, listing a user's pull
requests and requesting AI reviews, consumed by a React frontend.
"""
