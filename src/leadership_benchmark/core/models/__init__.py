"""SQLAlchemy ORM models for the AI Leadership Growth Benchmark."""
