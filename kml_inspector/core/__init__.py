"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Recognized vocabulary, Earth model, input limits
- exceptions: Custom exception hierarchy
- ingress: HTTP request decoding and response building
"""
