"""Database Metadata — SQLAlchemy Base shared by models, create_all and alembic."""
