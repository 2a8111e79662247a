"""Service layer for the AI Leadership Growth Benchmark.

Services orchestrate core scoring logic with provider and repository
interfaces. No FastAPI or SQLAlchemy imports belong in this package.
"""
