"""SQLAlchemy repositories for partner intakes, portfolio items, and plans."""
