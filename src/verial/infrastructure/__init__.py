"""Infrastructure layer: CSV exports, coordinate projection, file output.

This layer depends on stdlib and third-party libs (pyproj).
It must never import from services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
