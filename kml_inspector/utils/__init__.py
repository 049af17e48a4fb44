"""Shared helpers: geodesic measurement and GeoJSON export."""
