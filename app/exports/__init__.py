from app.exports.routes import exports_bp

__all__ = ["exports_bp"]
