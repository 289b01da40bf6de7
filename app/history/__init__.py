from app.history.routes import history_bp

__all__ = ["history_bp"]
