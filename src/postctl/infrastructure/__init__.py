"""Infrastructure layer: file discovery and the content repository.

This layer handles file I/O. It may import from domain, never from
services, commands, or output.
"""
