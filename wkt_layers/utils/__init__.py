"""Helpers around the parser: input loading and GeoJSON output.

- loader: read raw entity collections from JSON exports
- geojson: wrap parsed geometry into GeoJSON features via shapely
"""
