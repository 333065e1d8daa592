"""VisionAI recolor service: FastAPI REST API layer.

Modules
-------
main
    FastAPI application factory, route handlers, and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response bodies.
validation
    Turns a raw recolor request into a validated job or a 400 error.
"""
