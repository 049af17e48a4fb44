"""Orchestrators that combine activities over one parsed document.

- inspect_kml: Parse once, summarise and extract, build the JSON report
"""
