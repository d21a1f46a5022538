"""FastAPI applications for the users and products services."""
