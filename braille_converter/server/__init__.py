"""HTTP API server for the braille converter.

WHY: Lets a desktop shell or web editor call the conversions without
spawning the CLI.

HOW: app.py defines the FastAPI application, models.py the pydantic
request/response schemas.
"""
