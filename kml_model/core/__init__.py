"""Core utilities and shared infrastructure.

- config: Codec configuration loading and validation
- constants: Namespace URIs and named sentinel values
- exceptions: Violation taxonomy shared by models, validation and codec
"""
