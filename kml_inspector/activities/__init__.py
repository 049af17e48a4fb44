"""Inspection activity functions.

Each activity performs a single unit of work over a KML document:
- parse_kml: Turn raw text into a typed, read-only document tree
- summarize: Count recognized element names
- extract_geometry: Extract LineString paths and measure their length
"""
